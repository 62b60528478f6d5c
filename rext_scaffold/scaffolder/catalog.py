"""Catalog of every file the scaffolder can generate.

The catalog is a single immutable table of ``FileDescriptor`` records, built
once at import time.  Each descriptor names the file on disk, the directory it
lives in relative to the project root, the module it belongs to, and the
bundled template that supplies its content.  Adding a generatable file means
appending one descriptor (and its template) here; nothing else changes.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePosixPath

from rext_scaffold.config import Module


ROOT_DIRECTORY = "."


class FileIdentity(Enum):
    """Stable lookup key for one generatable file."""

    # Root files
    REXT_CONFIG = "rext_config"
    EXAMPLE_ENV = "example_env"
    DOCKER_COMPOSE_YML = "docker_compose_yml"
    DOCKER_IGNORE = "docker_ignore"
    DOCKERFILE = "dockerfile"
    GIT_IGNORE = "git_ignore"
    README_MD = "readme_md"
    BUILD_RS = "build_rs"
    CARGO_TOML = "cargo_toml"

    # Backend
    MAIN_RS = "main_rs"
    BRIDGE_MOD_RS = "bridge_mod_rs"
    HANDLERS_MOD_RS = "handlers_mod_rs"
    HANDLERS_WEBSOCKET_RS = "handlers_websocket_rs"
    HANDLERS_ADMIN_RS = "handlers_admin_rs"
    HANDLERS_ROLES_RS = "handlers_roles_rs"
    HANDLERS_AUTH_RS = "handlers_auth_rs"
    MIDDLEWARE_MOD_RS = "middleware_mod_rs"
    MIDDLEWARE_AUTH_RS = "middleware_auth_rs"
    MIDDLEWARE_ADMIN_RS = "middleware_admin_rs"
    MIDDLEWARE_LOGGING_RS = "middleware_logging_rs"
    ROUTES_MOD_RS = "routes_mod_rs"
    ROUTES_ADMIN_RS = "routes_admin_rs"
    ROUTES_AUTH_RS = "routes_auth_rs"
    BRIDGE_TYPES_MOD_RS = "bridge_types_mod_rs"
    BRIDGE_TYPES_ADMIN_RS = "bridge_types_admin_rs"
    BRIDGE_TYPES_AUTH_RS = "bridge_types_auth_rs"
    BRIDGE_TYPES_LOGGING_RS = "bridge_types_logging_rs"
    CONTROL_MOD_RS = "control_mod_rs"
    SERVICES_MOD_RS = "services_mod_rs"
    SERVER_CONFIG_RS = "server_config_rs"
    STARTUP_RS = "startup_rs"
    USER_SERVICE_RS = "user_service_rs"
    DATABASE_SERVICE_RS = "database_service_rs"
    ADMIN_SERVICE_RS = "admin_service_rs"
    TOKEN_SERVICE_RS = "token_service_rs"
    SESSION_SERVICE_RS = "session_service_rs"
    AUTH_SERVICE_RS = "auth_service_rs"
    PERMISSION_SERVICE_RS = "permission_service_rs"
    SYSTEM_MONITOR_RS = "system_monitor_rs"
    DOMAIN_MOD_RS = "domain_mod_rs"
    DOMAIN_PERMISSIONS_RS = "domain_permissions_rs"
    DOMAIN_USER_RS = "domain_user_rs"
    DOMAIN_VALIDATION_RS = "domain_validation_rs"
    DOMAIN_AUTH_RS = "domain_auth_rs"
    ENTITY_MOD_RS = "entity_mod_rs"
    INFRASTRUCTURE_MOD_RS = "infrastructure_mod_rs"
    INFRASTRUCTURE_JOB_QUEUE_RS = "infrastructure_job_queue_rs"
    INFRASTRUCTURE_LOGGING_RS = "infrastructure_logging_rs"
    INFRASTRUCTURE_SCHEDULER_RS = "infrastructure_scheduler_rs"
    INFRASTRUCTURE_WEBSOCKET_RS = "infrastructure_websocket_rs"
    INFRASTRUCTURE_APP_ERROR_RS = "infrastructure_app_error_rs"
    INFRASTRUCTURE_EMAIL_RS = "infrastructure_email_rs"
    INFRASTRUCTURE_DATABASE_RS = "infrastructure_database_rs"
    INFRASTRUCTURE_QUERY_PERFORMANCE_RS = "infrastructure_query_performance_rs"
    INFRASTRUCTURE_SERVER_RS = "infrastructure_server_rs"
    INFRASTRUCTURE_CORS_RS = "infrastructure_cors_rs"
    INFRASTRUCTURE_OPENAPI_RS = "infrastructure_openapi_rs"
    INFRASTRUCTURE_JWT_CLAIMS_RS = "infrastructure_jwt_claims_rs"
    MACROS_MOD_RS = "macros_mod_rs"
    PERMISSION_MACRO_RS = "permission_macro_rs"

    # Frontend
    PACKAGE_JSON = "package_json"
    VITE_CONFIG_TS = "vite_config_ts"
    UNIFIED_CONFIG_TS = "unified_config_ts"
    OPENAPI_CONFIG_TS = "openapi_config_ts"
    TSCONFIG_JSON = "tsconfig_json"

    # Migration
    MIGRATION_LIB_RS = "migration_lib_rs"
    MIGRATION_MAIN_RS = "migration_main_rs"
    INITIAL_MIGRATION_RS = "initial_migration_rs"
    MIGRATION_CARGO_TOML = "migration_cargo_toml"


@dataclass(frozen=True)
class FileDescriptor:
    """One catalog entry.

    Attributes:
        identity: Unique key of the entry.
        display_name: File name on disk, including extension.
        relative_directory: Directory relative to the project root
            (``"."`` for root-level files).
        module: Module the file belongs to.
        needs_directory: Whether ``relative_directory`` must be created
            before the file is written.
        content_source: Template path inside the bundled template directory.
    """

    identity: FileIdentity
    display_name: str
    relative_directory: str
    module: Module
    needs_directory: bool
    content_source: str

    def directory_path(self, base_dir: Path) -> Path:
        """Directory the file is written into, under *base_dir*."""
        return Path(base_dir) / self.relative_directory

    def full_path(self, base_dir: Path) -> Path:
        """Absolute location of the file, under *base_dir*."""
        return self.directory_path(base_dir) / self.display_name

    @property
    def relative_path(self) -> PurePosixPath:
        """Path of the file relative to the project root."""
        return PurePosixPath(self.relative_directory) / self.display_name


def _entry(
    identity: FileIdentity,
    display_name: str,
    relative_directory: str = ROOT_DIRECTORY,
    *,
    source: str | None = None,
    module: Module = Module.CORE,
) -> FileDescriptor:
    """Build a descriptor, deriving the template path from the output path.

    Root-level files never need a directory.  The template path mirrors the
    output path with a ``.tmpl`` suffix unless *source* overrides it.
    """
    needs_directory = relative_directory != ROOT_DIRECTORY
    if source is None:
        stem = f"{relative_directory}/{display_name}" if needs_directory else display_name
        source = f"{stem}.tmpl"
    return FileDescriptor(
        identity=identity,
        display_name=display_name,
        relative_directory=relative_directory,
        module=module,
        needs_directory=needs_directory,
        content_source=source,
    )


_I = FileIdentity

_HANDLERS = "backend/bridge/handlers"
_MIDDLEWARE = "backend/bridge/middleware"
_ROUTES = "backend/bridge/routes"
_TYPES = "backend/bridge/types"
_SERVICES = "backend/control/services"
_DOMAIN = "backend/domain"
_INFRA = "backend/infrastructure"
_MACROS = "backend/infrastructure/macros"

# Order matters only for the order directories are created in.
_CATALOG: tuple[FileDescriptor, ...] = (
    # -- Root files --------------------------------------------------------
    _entry(_I.REXT_CONFIG, "rext.toml"),
    _entry(_I.EXAMPLE_ENV, "example.env"),
    _entry(_I.DOCKER_COMPOSE_YML, "docker-compose.yml"),
    _entry(_I.DOCKER_IGNORE, "dockerignore"),
    _entry(_I.DOCKERFILE, "Dockerfile"),
    _entry(_I.GIT_IGNORE, ".gitignore", source="gitignore.tmpl"),
    _entry(_I.README_MD, "README.md"),
    _entry(_I.BUILD_RS, "build.rs"),
    _entry(_I.CARGO_TOML, "Cargo.toml"),
    # -- Backend -----------------------------------------------------------
    _entry(_I.MAIN_RS, "main.rs", "backend"),
    _entry(_I.BRIDGE_MOD_RS, "mod.rs", "backend/bridge"),
    _entry(_I.HANDLERS_MOD_RS, "mod.rs", _HANDLERS),
    _entry(_I.HANDLERS_WEBSOCKET_RS, "websocket.rs", _HANDLERS),
    _entry(_I.HANDLERS_ADMIN_RS, "admin.rs", _HANDLERS),
    _entry(_I.HANDLERS_ROLES_RS, "roles.rs", _HANDLERS),
    _entry(_I.HANDLERS_AUTH_RS, "auth.rs", _HANDLERS),
    _entry(_I.MIDDLEWARE_MOD_RS, "mod.rs", _MIDDLEWARE),
    _entry(_I.MIDDLEWARE_AUTH_RS, "auth.rs", _MIDDLEWARE),
    _entry(_I.MIDDLEWARE_ADMIN_RS, "admin.rs", _MIDDLEWARE),
    _entry(_I.MIDDLEWARE_LOGGING_RS, "logging.rs", _MIDDLEWARE),
    _entry(_I.ROUTES_MOD_RS, "mod.rs", _ROUTES),
    _entry(_I.ROUTES_ADMIN_RS, "admin.rs", _ROUTES),
    _entry(_I.ROUTES_AUTH_RS, "auth.rs", _ROUTES),
    _entry(_I.BRIDGE_TYPES_MOD_RS, "mod.rs", _TYPES),
    _entry(_I.BRIDGE_TYPES_ADMIN_RS, "admin.rs", _TYPES),
    _entry(_I.BRIDGE_TYPES_AUTH_RS, "auth.rs", _TYPES),
    _entry(_I.BRIDGE_TYPES_LOGGING_RS, "logging.rs", _TYPES),
    _entry(_I.CONTROL_MOD_RS, "mod.rs", "backend/control"),
    _entry(_I.SERVICES_MOD_RS, "mod.rs", _SERVICES),
    _entry(_I.SERVER_CONFIG_RS, "server_config.rs", _SERVICES),
    _entry(_I.STARTUP_RS, "startup.rs", _SERVICES),
    _entry(_I.USER_SERVICE_RS, "user_service.rs", _SERVICES),
    _entry(_I.DATABASE_SERVICE_RS, "database_service.rs", _SERVICES),
    _entry(_I.ADMIN_SERVICE_RS, "admin_service.rs", _SERVICES),
    _entry(_I.TOKEN_SERVICE_RS, "token_service.rs", _SERVICES),
    _entry(_I.SESSION_SERVICE_RS, "session_service.rs", _SERVICES),
    _entry(_I.AUTH_SERVICE_RS, "auth_service.rs", _SERVICES),
    _entry(_I.PERMISSION_SERVICE_RS, "permission_service.rs", _SERVICES),
    _entry(_I.SYSTEM_MONITOR_RS, "system_monitor.rs", _SERVICES),
    _entry(_I.DOMAIN_MOD_RS, "mod.rs", _DOMAIN),
    _entry(_I.DOMAIN_PERMISSIONS_RS, "permissions.rs", _DOMAIN),
    _entry(_I.DOMAIN_USER_RS, "user.rs", _DOMAIN),
    _entry(_I.DOMAIN_VALIDATION_RS, "validation.rs", _DOMAIN),
    _entry(_I.DOMAIN_AUTH_RS, "auth.rs", _DOMAIN),
    _entry(_I.ENTITY_MOD_RS, "mod.rs", "backend/entity"),
    _entry(_I.INFRASTRUCTURE_MOD_RS, "mod.rs", _INFRA),
    _entry(_I.INFRASTRUCTURE_JOB_QUEUE_RS, "job_queue.rs", _INFRA),
    _entry(_I.INFRASTRUCTURE_LOGGING_RS, "logging.rs", _INFRA),
    _entry(_I.INFRASTRUCTURE_SCHEDULER_RS, "scheduler.rs", _INFRA),
    _entry(_I.INFRASTRUCTURE_WEBSOCKET_RS, "websocket.rs", _INFRA),
    _entry(_I.INFRASTRUCTURE_APP_ERROR_RS, "app_error.rs", _INFRA),
    _entry(_I.INFRASTRUCTURE_EMAIL_RS, "email.rs", _INFRA),
    _entry(_I.INFRASTRUCTURE_DATABASE_RS, "database.rs", _INFRA),
    _entry(_I.INFRASTRUCTURE_QUERY_PERFORMANCE_RS, "query_performance.rs", _INFRA),
    _entry(_I.INFRASTRUCTURE_SERVER_RS, "server.rs", _INFRA),
    _entry(_I.INFRASTRUCTURE_CORS_RS, "cors.rs", _INFRA),
    _entry(_I.INFRASTRUCTURE_OPENAPI_RS, "openapi.rs", _INFRA),
    _entry(_I.INFRASTRUCTURE_JWT_CLAIMS_RS, "jwt_claims.rs", _INFRA),
    _entry(_I.MACROS_MOD_RS, "mod.rs", _MACROS),
    _entry(_I.PERMISSION_MACRO_RS, "permission_macro.rs", _MACROS),
    # -- Frontend ----------------------------------------------------------
    _entry(_I.PACKAGE_JSON, "package.json", "frontend"),
    _entry(_I.VITE_CONFIG_TS, "vite.config.ts", "frontend"),
    _entry(_I.UNIFIED_CONFIG_TS, "unified.config.ts", "frontend/config"),
    _entry(_I.OPENAPI_CONFIG_TS, "openapi-ts.config.ts", "frontend"),
    _entry(_I.TSCONFIG_JSON, "tsconfig.json", "frontend"),
    # -- Migration ---------------------------------------------------------
    _entry(_I.MIGRATION_LIB_RS, "lib.rs", "migration/src"),
    _entry(_I.MIGRATION_MAIN_RS, "main.rs", "migration/src"),
    _entry(_I.INITIAL_MIGRATION_RS, "initial_migration.rs", "migration/src"),
    _entry(_I.MIGRATION_CARGO_TOML, "Cargo.toml", "migration"),
)

_BY_IDENTITY: dict[FileIdentity, FileDescriptor] = {d.identity: d for d in _CATALOG}


def catalog() -> tuple[FileDescriptor, ...]:
    """Return the full catalog in its fixed order."""
    return _CATALOG


def get_descriptor(identity: FileIdentity) -> FileDescriptor:
    """Look up the descriptor for *identity*."""
    return _BY_IDENTITY[identity]


def select(
    descriptors: Iterable[FileDescriptor], modules: Iterable[Module]
) -> list[FileDescriptor]:
    """Keep the descriptors whose module is in *modules*, preserving order.

    An empty *modules* collection selects nothing.
    """
    wanted = set(modules)
    return [d for d in descriptors if d.module in wanted]
