from channels.middleware import BaseMiddleware

IDENTITY_HEADER = b"x-user-id"


class GatewayIdentityMiddleware(BaseMiddleware):
    """
    Resolve the connecting user from the identity header the API gateway sets
    after validating the token. The identity provider owns authentication;
    this service only trusts the gateway.
    """

    async def __call__(self, scope, receive, send):
        scope["user_id"] = None
        headers = dict(scope.get("headers", []))
        raw = headers.get(IDENTITY_HEADER)

        if raw:
            try:
                scope["user_id"] = int(raw.decode())
            except ValueError:
                scope["user_id"] = None

        return await super().__call__(scope, receive, send)
