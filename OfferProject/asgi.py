import os
from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "OfferProject.settings")

django_asgi_app = get_asgi_application()

from channels.routing import ProtocolTypeRouter, URLRouter
from apps.notifications import routing
from apps.cores.middleware import GatewayIdentityMiddleware

application = ProtocolTypeRouter({
    "http": django_asgi_app,
    "websocket": GatewayIdentityMiddleware(
        URLRouter(routing.websocket_urlpatterns)
    ),
})
