from .admin import router as admin_router
from .auth import router as auth_router
from .clothing_items import router as clothing_items_router
from .outfits import router as outfits_router
