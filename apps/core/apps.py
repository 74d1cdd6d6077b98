from django.apps import AppConfig
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
import logging
import sys

logger = logging.getLogger(__name__)

MIN_JWT_SECRET_LENGTH = 32
KEY_HINT = "Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(50))\""


class CoreConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.core'
    verbose_name = 'Core'

    def ready(self):
        """
        Refuse to serve requests with a missing or weak signing setup.

        Management commands other than runserver and test skip the checks so
        migrations and shells work with partial configuration.
        """
        if len(sys.argv) > 1 and sys.argv[1] not in ('runserver', 'test') and 'gunicorn' not in sys.argv[0]:
            return

        self._validate_jwt_configuration()
        self._validate_security_settings()
        logger.info("Startup security validations passed")

    def _validate_jwt_configuration(self):
        jwt_secret = getattr(settings, 'JWT_SECRET_KEY', None)

        if not jwt_secret:
            raise ImproperlyConfigured(f"JWT_SECRET_KEY must be set. {KEY_HINT}")

        if len(jwt_secret) < MIN_JWT_SECRET_LENGTH:
            raise ImproperlyConfigured(
                f"JWT_SECRET_KEY must be at least {MIN_JWT_SECRET_LENGTH} characters long. "
                f"Current length: {len(jwt_secret)}. {KEY_HINT}"
            )

        if jwt_secret == settings.SECRET_KEY:
            raise ImproperlyConfigured(f"JWT_SECRET_KEY must differ from SECRET_KEY. {KEY_HINT}")

        if len(set(jwt_secret)) < 16:
            raise ImproperlyConfigured(f"JWT_SECRET_KEY has insufficient entropy. {KEY_HINT}")

    def _validate_security_settings(self):
        secret_key = getattr(settings, 'SECRET_KEY', None)
        if not secret_key:
            raise ImproperlyConfigured(f"SECRET_KEY must be set. {KEY_HINT}")

        if settings.DEBUG:
            return

        secret_lower = secret_key.lower()
        for pattern in ('change-me', 'insecure', 'your-secret-key'):
            if pattern in secret_lower:
                raise ImproperlyConfigured(
                    f"SECRET_KEY appears to be a default value (contains '{pattern}'). {KEY_HINT}"
                )

        if not getattr(settings, 'SECURE_SSL_REDIRECT', False):
            logger.warning("SECURE_SSL_REDIRECT is not enabled in production")
