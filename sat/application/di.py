"""Dependency wiring for the authorization engine."""

from dishka import (
    AsyncContainer,
    Container,
    Provider,
    Scope,
    from_context,
    make_async_container,
    make_container,
    provide,
)

from sat.config import Config
from sat.domain.auth.model.permission import DEFAULT_PERMISSION_CATALOG, PermissionCatalog
from sat.domain.auth.model.role import RoleHierarchy
from sat.domain.auth.service.authorization import AuthorizationService
from sat.domain.auth.service.claims import ClaimsExtractor, ClaimsIssuer
from sat.domain.shared.authorization.policy_set import PolicySet, build_policy_set
from sat.domain.shared.authorization.scope import ScopeResolver


class AuthorizationProvider(Provider):
    """Application-lifetime authorization collaborators, built from Config."""

    config = from_context(provides=Config, scope=Scope.APP)

    @provide(scope=Scope.APP)
    def get_claims_extractor(self) -> ClaimsExtractor:
        return ClaimsExtractor()

    @provide(scope=Scope.APP)
    def get_claims_issuer(self) -> ClaimsIssuer:
        return ClaimsIssuer()

    @provide(scope=Scope.APP)
    def get_role_hierarchy(self, config: Config) -> RoleHierarchy:
        return config.authorization.hierarchy()

    @provide(scope=Scope.APP)
    def get_permission_catalog(self) -> PermissionCatalog:
        return DEFAULT_PERMISSION_CATALOG

    @provide(scope=Scope.APP)
    def get_scope_resolver(self, config: Config, hierarchy: RoleHierarchy) -> ScopeResolver:
        return ScopeResolver(
            hierarchy,
            missing_position_level=config.authorization.missing_position_level,
        )

    @provide(scope=Scope.APP)
    def get_policy_set(self, hierarchy: RoleHierarchy, catalog: PermissionCatalog) -> PolicySet:
        policies = build_policy_set(hierarchy, catalog)
        policies.validate_coverage(catalog, hierarchy)
        return policies

    @provide(scope=Scope.APP)
    def get_authorization_service(
        self,
        hierarchy: RoleHierarchy,
        catalog: PermissionCatalog,
        resolver: ScopeResolver,
        extractor: ClaimsExtractor,
        policies: PolicySet,
    ) -> AuthorizationService:
        return AuthorizationService(
            _hierarchy=hierarchy,
            _catalog=catalog,
            _resolver=resolver,
            _extractor=extractor,
            _policies=policies,
        )


def create_container(config: Config | None = None) -> Container:
    if config is None:
        # Pydantic Settings populates from env vars at runtime
        config = Config()
    return make_container(AuthorizationProvider(), context={Config: config})


def create_async_container(config: Config | None = None) -> AsyncContainer:
    """Container for the FastAPI app; see ``setup_authorization``."""
    if config is None:
        config = Config()
    return make_async_container(AuthorizationProvider(), context={Config: config})


def build_authorization_service(config: Config | None = None) -> AuthorizationService:
    return create_container(config).get(AuthorizationService)
