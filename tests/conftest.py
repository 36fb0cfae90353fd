# Test configuration
import os

# Test environment variables
os.environ.setdefault("EUREKA_REGISTRY_URL", "http://testserver")
os.environ.setdefault("EUREKA_TOKEN_URL", "http://testserver/oauth/token")
os.environ.setdefault("EUREKA_CLIENT_NAME", "test-client")
os.environ.setdefault("EUREKA_CLIENT_SECRET", "test-secret-key")
os.environ.setdefault("LOG_LEVEL", "INFO")
