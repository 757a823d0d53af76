import sys

from .base import *

INSTALLED_APPS += [
    'corsheaders',
    'rest_framework',
    'drf_spectacular',
    'apps.shared',
    'apps.events',
    'apps.tickets',
    'apps.participants',
    'apps.mediafiles',
]

REST_FRAMEWORK = {
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.AllowAny',
    ],
    'DEFAULT_AUTHENTICATION_CLASSES': [],
    'DEFAULT_PARSER_CLASSES': [
        'rest_framework.parsers.JSONParser',
        'rest_framework.parsers.MultiPartParser',
        'rest_framework.parsers.FormParser',
    ],
    'DEFAULT_SCHEMA_CLASS': 'drf_spectacular.openapi.AutoSchema',
    'EXCEPTION_HANDLER': 'apps.shared.exceptions.api_handler.custom_exception_handler',
}

MIDDLEWARE = [
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

# Environment
TESTING_ENVIRONMENT = 'testing'
PRODUCTION_ENVIRONMENT = 'production'
STAGING_ENVIRONMENT = 'staging'
DEVELOPMENT_ENVIRONMENT = 'development'

if 'test' in sys.argv or 'pytest' in sys.modules:  # noqa: SIM108
    ENVIRONMENT = TESTING_ENVIRONMENT
else:
    ENVIRONMENT = env('ENVIRONMENT', default=DEVELOPMENT_ENVIRONMENT)

if ENVIRONMENT == TESTING_ENVIRONMENT:
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': ':memory:',
        }
    }

# CORS
CORS_ALLOW_CREDENTIALS = True
CORS_ALLOWED_ORIGINS = [
    'http://localhost:3000',
    'http://127.0.0.1:3000',
    env('FRONTEND_URL', default='http://localhost:3000'),
]

if DEBUG:
    CORS_ALLOW_ALL_ORIGINS = True

# Swagger
SPECTACULAR_SETTINGS = {
    'TITLE': 'Event Ticketing API',
    'DESCRIPTION': 'Event management, ticket provisioning and participant registration',
    'VERSION': 'v1',
    'SERVE_INCLUDE_SCHEMA': False,
}

# Registration links embedded in ticket QR codes: <SERVER_URL>/register?token=<TOKEN>
SERVER_URL = env.str('SERVER_URL', default='http://localhost:3000')
REGISTRATION_PATH = '/register'

ASSET_STORAGE_PROVIDER = env.str('ASSET_STORAGE_PROVIDER', default='local')

MAX_DESIGN_UPLOAD_SIZE = env.int('MAX_DESIGN_UPLOAD_SIZE', default=10 * 1024 * 1024)

# Leaves replaced design assets and per-ticket QR files on disk unless enabled
CLEANUP_ORPHANED_ASSETS = env.bool('CLEANUP_ORPHANED_ASSETS', default=False)

# Upper bound on the tickets minted synchronously for one event
MAX_TICKET_QUOTA = env.int('MAX_TICKET_QUOTA', default=10000)

TICKET_PROVISIONING = {
    'WORKERS': env.int('TICKET_PROVISIONING_WORKERS', default=1),
    'TIMEOUT': env.float('TICKET_PROVISIONING_TIMEOUT', default=120),  # seconds, 0 disables
    'TOKEN_MAX_ATTEMPTS': env.int('TICKET_TOKEN_MAX_ATTEMPTS', default=5),
    'QR_SIZE': 200,
    'QR_MARGIN': 2,
    'QR_FILL_COLOR': '#000000',
    'QR_BACK_COLOR': '#FFFFFF',
}
