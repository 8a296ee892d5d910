from rest_framework.permissions import BasePermission

from ticketing.conf import get_config


class IsAdministrator(BasePermission):
    """
    Allows the view's ``administrator_methods`` only to the configured
    administrator. Other methods are left to the service.
    """

    def has_permission(self, request, view):
        if request.method not in getattr(view, "administrator_methods", ()):
            return True
        user = request.user
        return bool(
            user
            and user.is_authenticated
            and user.identity == get_config().administrator
        )
