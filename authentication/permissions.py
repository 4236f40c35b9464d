from typing import Dict, Optional

from rest_framework.permissions import BasePermission

from utils.rbac import Capability, authorize


class CapabilityRequired(BasePermission):
    """
    Enforce the capability a view declares for the current action.

    Views declare ``capabilities = {"list": None, "create": Capability.ADMIN_ONLY, ...}``;
    ``None`` marks a public action. Actions missing from the map fall back to
    ``default_capability`` (ANY_AUTHENTICATED unless the view overrides it).

    SELF_OR_ADMIN is decided per object: ``has_permission`` only requires an
    authenticated caller, ``has_object_permission`` compares the caller with the
    object's owner, read from ``view.owner_field`` (``user_id`` by default).
    """

    def get_capability(self, request, view) -> Optional[Capability]:
        capabilities: Dict = getattr(view, "capabilities", {})
        action = getattr(view, "action", None) or request.method.lower()
        return capabilities.get(action, getattr(view, "default_capability", Capability.ANY_AUTHENTICATED))

    def has_permission(self, request, view):
        capability = self.get_capability(request, view)
        if capability is None:
            return True

        if capability is Capability.SELF_OR_ADMIN:
            authorize(request.user, Capability.ANY_AUTHENTICATED)
        else:
            authorize(request.user, capability)
        return True

    def has_object_permission(self, request, view, obj):
        capability = self.get_capability(request, view)
        if capability is not Capability.SELF_OR_ADMIN:
            return True

        owner_field = getattr(view, "owner_field", "user_id")
        authorize(request.user, capability, owner_id=getattr(obj, owner_field, None))
        return True
