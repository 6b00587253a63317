from corujo_core.core.domain.entities.user_entity import AGENT_PROFILES
from rest_framework.permissions import BasePermission

SUPERVISOR_PROFILE = "supervisao"


class IsSupervisor(BasePermission):
    """Allows access only to users with perfil 'supervisao'."""

    def has_permission(self, request, view):
        return bool(request.user and getattr(request.user, "perfil", None) == SUPERVISOR_PROFILE)


class IsAgent(BasePermission):
    """Allows access only to call-center / whatsapp agents."""

    def has_permission(self, request, view):
        return bool(request.user and getattr(request.user, "perfil", None) in AGENT_PROFILES)


class IsAgentOrSupervisor(BasePermission):
    def has_permission(self, request, view):
        perfil = getattr(request.user, "perfil", None) if request.user else None
        return perfil in AGENT_PROFILES or perfil == SUPERVISOR_PROFILE
