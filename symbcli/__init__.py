from .auth import AuthorizeClient
from .client import SymbologyClient
from .config import Config
from .login import LoginOrchestrator
from .models import ConversionResult, ConvertRequest, FieldEnum, Token

__version__ = "0.1.0"
__all__ = [
    "AuthorizeClient",
    "SymbologyClient",
    "Config",
    "LoginOrchestrator",
    "ConversionResult",
    "ConvertRequest",
    "FieldEnum",
    "Token",
]
