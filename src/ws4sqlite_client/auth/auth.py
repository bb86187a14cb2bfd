from ws4sqlite_client.auth.authenticators import (
    AuthProvider,
    BasicAuthProvider,
    InlineAuthProvider,
    NoAuthProvider,
)
from ws4sqlite_client.types import AuthMode


def get_auth_provider(cfg) -> AuthProvider:
    if cfg.auth_mode == AuthMode.INLINE:
        assert cfg.user is not None
        assert cfg.password is not None
        return InlineAuthProvider(cfg.user, cfg.password)
    elif cfg.auth_mode == AuthMode.HTTP:
        assert cfg.user is not None
        assert cfg.password is not None
        return BasicAuthProvider(cfg.user, cfg.password)
    elif cfg.auth_mode == AuthMode.NONE:
        return NoAuthProvider()
    else:
        raise RuntimeError(f"Unsupported auth mode: {cfg.auth_mode}")
