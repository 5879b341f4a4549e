from .auth_store import AuthStore
from .bootstrap import Services, build_services
from .clients import ChatClient, ProductsClient, SalesClient, UsersClient
from .config import ClientConfig, ConfigError, load_config
from .endpoint import PRESETS, ServerEndpoint, check_connection
from .exceptions import (
    ActivationRequired,
    ApiError,
    AuthenticationRequired,
    LocalValidationError,
    NetworkFailure,
    NotFound,
    PermissionDenied,
    ServerError,
    TransportError,
    ValidationFailed,
)
from .http_client import ApiResponse, HttpClient, build_query, parse_error
from .logging_config import configure_logging
from .models import (
    ChatMessage,
    ChatResponse,
    LoginResult,
    Page,
    Product,
    ProductQuery,
    Sale,
    SaleFormOptions,
    SaleQuery,
    User,
    UserQuery,
)
from .pagination import PaginationState
from .permissions import PermissionGate, Role
from .session import SessionManager, SessionState
from .ui_errors import UserFacingError, to_user_facing_error

__all__ = [
    "ActivationRequired",
    "ApiError",
    "ApiResponse",
    "AuthStore",
    "AuthenticationRequired",
    "ChatClient",
    "ChatMessage",
    "ChatResponse",
    "ClientConfig",
    "ConfigError",
    "HttpClient",
    "LocalValidationError",
    "LoginResult",
    "NetworkFailure",
    "NotFound",
    "PRESETS",
    "Page",
    "PaginationState",
    "PermissionDenied",
    "PermissionGate",
    "Product",
    "ProductQuery",
    "ProductsClient",
    "Role",
    "Sale",
    "SaleFormOptions",
    "SaleQuery",
    "SalesClient",
    "ServerEndpoint",
    "ServerError",
    "Services",
    "SessionManager",
    "SessionState",
    "TransportError",
    "User",
    "UserFacingError",
    "UserQuery",
    "UsersClient",
    "ValidationFailed",
    "build_query",
    "build_services",
    "check_connection",
    "configure_logging",
    "load_config",
    "parse_error",
    "to_user_facing_error",
]
