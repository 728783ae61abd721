from modules.auth.gateway import SupabaseIdentityGateway
from modules.auth.interfaces import IAuthService, IIdentityGateway
from modules.auth.service import AuthService


AUTH_METHODS = [
    "register",
    "verify_registration",
    "login",
    "verify_login",
    "resend_registration_otp",
    "resend_login_otp",
    "refresh_token",
    "validate_token",
    "get_user_by_id",
    "get_user_by_email",
]

GATEWAY_METHODS = ["request_otp", "verify_otp", "refresh_session"]


class TestAuthInterface:
    def test_interface_methods_exist(self):
        """IAuthService should define every workflow."""
        for method in AUTH_METHODS:
            assert hasattr(IAuthService, method)

    def test_auth_service_has_interface_methods(self):
        """AuthService should implement every IAuthService method."""
        for method in AUTH_METHODS:
            assert callable(getattr(AuthService, method))

    def test_service_instance_satisfies_protocol(self, service):
        assert isinstance(service, IAuthService)


class TestIdentityGatewayInterface:
    def test_gateway_has_interface_methods(self):
        for method in GATEWAY_METHODS:
            assert hasattr(IIdentityGateway, method)
            assert callable(getattr(SupabaseIdentityGateway, method))

    def test_mock_gateway_satisfies_protocol(self, gateway):
        assert isinstance(gateway, IIdentityGateway)
