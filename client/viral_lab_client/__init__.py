from .client import ViralLabClient
from .encoding import EncodedVideo, encode_video_file
from .exceptions import (
    AnalysisFailedError,
    FeatureUnavailableError,
    NoAnalysisError,
    RemixFailedError,
    RemoteCallError,
    UnsupportedFileError,
    ViralLabClientError,
)
from .identity import IdentityProvider, StaticTokenIdentity
from .session import ViralLabSession

__all__ = [
    "ViralLabClient",
    "ViralLabSession",
    "EncodedVideo",
    "encode_video_file",
    "IdentityProvider",
    "StaticTokenIdentity",
    "ViralLabClientError",
    "RemoteCallError",
    "AnalysisFailedError",
    "RemixFailedError",
    "FeatureUnavailableError",
    "UnsupportedFileError",
    "NoAnalysisError",
]
