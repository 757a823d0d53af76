from rest_framework.views import APIView

from apps.shared.decorators.database import ensure_database_available


class BaseAPIView(APIView):
    """
    Unified base class for all API views.

    Features:
    - Database availability check before the handler runs
    - Service layer integration

    Note: Exception handling is centralized in the DRF exception handler.
    """

    authentication_classes = ()
    requires_database = True

    def initial(self, request, *args, **kwargs):
        super().initial(request, *args, **kwargs)
        if self.requires_database:
            ensure_database_available()

    def get_service(self):
        """
        Subclasses must implement this to return appropriate service instance.

        Raises:
            NotImplementedError: If not implemented by subclass
        """
        raise NotImplementedError('Subclasses must implement get_service()')
