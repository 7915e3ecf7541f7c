DEFAULT_BASE_URL = "https://exoticworld-backend.onrender.com/"

API_PREFIX = "api/v1"

# usuario sin login: el carrito se particiona por este id
DEFAULT_USER_ID = "usuario_demo_001"

USER_ID_KEY = "user_id"

DEFAULT_QUANTITY = 1
