"""The single authorization entry point request handlers consult."""

import logging
from dataclasses import field

from sat.domain.auth.model.access import AccessContext, TargetResource
from sat.domain.auth.model.permission import DEFAULT_PERMISSION_CATALOG, PermissionCatalog
from sat.domain.auth.model.principal import Principal
from sat.domain.auth.model.role import DEFAULT_ROLE_HIERARCHY, RoleHierarchy
from sat.domain.auth.service.claims import ClaimsExtractor
from sat.domain.shared.authorization.action import AccessMode
from sat.domain.shared.authorization.policy import requires_permission, requires_role
from sat.domain.shared.authorization.policy_set import POLICY_SET, PolicySet
from sat.domain.shared.authorization.scope import ScopeDecision, ScopeResolver
from sat.domain.shared.error import AccessContextError, AuthorizationError, ConfigurationError
from sat.domain.shared.service import Service

logger = logging.getLogger(__name__)


def _ensure_context(ctx: object) -> AccessContext:
    if not isinstance(ctx, AccessContext):
        raise AccessContextError(
            f"Authorization check requires an AccessContext, got {type(ctx).__name__}"
        )
    return ctx


class AuthorizationService(Service):
    """Decides whether an access context may do something.

    The boolean methods are pure and never raise for a deny. The ``require_*``
    variants raise AuthorizationError instead of returning False. Passing
    anything other than an AccessContext raises AccessContextError.
    """

    _hierarchy: RoleHierarchy = DEFAULT_ROLE_HIERARCHY
    _catalog: PermissionCatalog = DEFAULT_PERMISSION_CATALOG
    _resolver: ScopeResolver = field(default_factory=ScopeResolver)
    _extractor: ClaimsExtractor = field(default_factory=ClaimsExtractor)
    _policies: PolicySet = POLICY_SET

    def context_for(self, principal: Principal) -> AccessContext:
        if principal is None:
            raise AccessContextError("Cannot build an AccessContext without a principal")
        return self._extractor.extract(principal)

    # --- Boolean checks ---

    def authorize_permission(self, ctx: AccessContext, permission: str) -> bool:
        return requires_permission(permission).evaluate(_ensure_context(ctx))

    def authorize_role(self, ctx: AccessContext, minimum_role: str) -> bool:
        return requires_role(minimum_role, self._hierarchy).evaluate(_ensure_context(ctx))

    def authorize_policy(self, ctx: AccessContext, name: str) -> bool:
        return self._policies.evaluate(_ensure_context(ctx), name)

    def authorize_scope(self, ctx: AccessContext, target: TargetResource, mode: AccessMode) -> bool:
        ctx = _ensure_context(ctx)
        if target is None:
            raise AccessContextError("Scope check requires a TargetResource")

        if mode == AccessMode.READ:
            allowed = self._resolver.can_access(ctx, target)
        elif mode == AccessMode.WRITE:
            allowed = self._resolver.can_modify(ctx, target)
        elif mode == AccessMode.SCHEDULE:
            allowed = self._resolver.can_create_schedule_for(ctx, target)
        else:
            raise ConfigurationError(f"Unsupported access mode: {mode!r}")

        if not allowed:
            logger.debug(
                "Scope denied: employee=%s mode=%s target=%s",
                ctx.employee_id,
                mode,
                target,
            )
        return allowed

    def resolve_listing_scope(self, ctx: AccessContext) -> ScopeDecision:
        return self._resolver.listing_scope(_ensure_context(ctx))

    def is_known_permission(self, permission: str) -> bool:
        return self._catalog.is_known(permission)

    # --- Raising variants ---

    def require_permission(self, ctx: AccessContext, permission: str) -> None:
        if not self.authorize_permission(ctx, permission):
            self._deny(ctx, f"permission {permission}")

    def require_role(self, ctx: AccessContext, minimum_role: str) -> None:
        if not self.authorize_role(ctx, minimum_role):
            self._deny(ctx, f"role {minimum_role}")

    def require_policy(self, ctx: AccessContext, name: str) -> None:
        self._policies.guard(_ensure_context(ctx), name)

    def require_scope(self, ctx: AccessContext, target: TargetResource, mode: AccessMode) -> None:
        if not self.authorize_scope(ctx, target, mode):
            self._deny(ctx, f"{mode} on employee={target.employee_id} department={target.department_id}")

    @staticmethod
    def _deny(ctx: AccessContext, what: str) -> None:
        logger.warning("Authorization denied: employee=%s requirement=%s", ctx.employee_id, what)
        raise AuthorizationError(f"Access denied: requires {what}", code="access_denied")
