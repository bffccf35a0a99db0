from .changelog import ChangelogUseCase
from .playback import PlaybackSources, PlaybackUseCase, UnavailableServer
from .server_admin import ServerAdminUseCase
from .wishlist import WishlistUseCase

__all__ = [
    "ChangelogUseCase",
    "PlaybackSources",
    "PlaybackUseCase",
    "ServerAdminUseCase",
    "UnavailableServer",
    "WishlistUseCase",
]
