from .catalog import (
    CatalogItem,
    ChangelogEntry,
    Episode,
    SeasonSummary,
    TitleDetails,
    Trailer,
    WishlistItem,
)
from .errors import (
    BuiltInServerReadOnly,
    EmbedarrError,
    RecordStoreError,
    ServerNotFound,
    WishlistItemExists,
    WishlistItemNotFound,
)
from .results import Err, Ok, Result
from .servers import (
    MediaKind,
    PlaybackRequest,
    ResolvedUrl,
    ServerDefinition,
    TemplateKind,
)

__all__ = [
    "BuiltInServerReadOnly",
    "CatalogItem",
    "ChangelogEntry",
    "EmbedarrError",
    "Episode",
    "Err",
    "MediaKind",
    "Ok",
    "PlaybackRequest",
    "RecordStoreError",
    "ResolvedUrl",
    "Result",
    "SeasonSummary",
    "ServerDefinition",
    "ServerNotFound",
    "TemplateKind",
    "TitleDetails",
    "Trailer",
    "WishlistItem",
    "WishlistItemExists",
    "WishlistItemNotFound",
]
