# Eureka Discovery Constants
# Protocol literals shared by the token, registration and discovery calls

# HTTP Status Codes
HTTP_OK = 200
HTTP_NO_CONTENT = 204

# HTTP Headers
AUTHORIZATION_HEADER = "Authorization"
CONTENT_TYPE_HEADER = "Content-Type"
ACCEPT_HEADER = "Accept"
BEARER_PREFIX = "bearer "
JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# OAuth2
CLIENT_CREDENTIALS_GRANT = "client_credentials"

# API Endpoints
EUREKA_APPS_ROUTE = "/eureka/apps/{}"

# Registration payload literals
INSTANCE_STATUS_UP = "UP"
PORT_ENABLED = "true"
DATA_CENTER_INFO_CLASS = "com.netflix.appinfo.InstanceInfo$DefaultDataCenterInfo"
DATA_CENTER_NAME = "MyOwn"
HOST_NAME_FORMAT = "{}-{}-{}"

# Default Values
DEFAULT_HTTP_TIMEOUT_SECONDS = 10.0

# Log Messages
LOG_TOKEN_REQUESTED = "Requesting access token from {}"
LOG_INSTANCE_REGISTERED = "Instance registered: {} ({}:{})"
LOG_REGISTER_ALL_STARTED = "Registering {} service instance(s)"
LOG_REGISTER_ALL_FINISHED = "Registered {} service instance(s)"
LOG_INSTANCE_DISCOVERED = "Discovered {} instance(s) of {}, selected {}"
