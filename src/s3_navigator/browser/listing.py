"""Listing engine: raw store entries to navigation items."""

from s3_navigator.browser.collaborators import StoreClient
from s3_navigator.browser.items import FileItem, FolderItem, NavigationItem
from s3_navigator.core import get_logger, get_tracer
from s3_navigator.core.exceptions import (
    ListingError,
    ListingErrorKind,
    StoreClientError,
)

logger = get_logger(__name__)
tracer = get_tracer(__name__)

AUTH_ERROR_CODES = {
    "AccessDenied",
    "AllAccessDisabled",
    "ExpiredToken",
    "InvalidAccessKeyId",
    "InvalidToken",
    "NoCredentialsError",
    "PartialCredentialsError",
    "SignatureDoesNotMatch",
    "TokenRefreshRequired",
}

CONFIG_ERROR_CODES = {
    "AuthorizationHeaderMalformed",
    "IllegalLocationConstraintException",
    "InvalidBucketName",
    "InvalidEndpoint",
    "NoSuchBucket",
    "PermanentRedirect",
    "ProfileNotFound",
}

NETWORK_ERROR_CODES = {
    "ConnectTimeoutError",
    "ConnectionClosedError",
    "EndpointConnectionError",
    "NetworkError",
    "ProxyConnectionError",
    "SSLError",
}

NETWORK_MESSAGE_MARKERS = (
    "failed to fetch",
    "network",
    "could not connect",
    "connection refused",
)

NETWORK_HINT = (
    "This might be a cross-origin or network issue. Check the endpoint URL and "
    "region, and make sure the bucket's CORS settings allow requests from this "
    "application."
)


def classify_listing_failure(error: Exception) -> ListingError:
    """Map a store failure to a ListingError.

    The network heuristic only tags the error and rewrites its description;
    it never changes the kind. Markers are matched against the backend's own
    message, never the wrapper text that names the bucket and prefix.
    """
    code = getattr(error, "code", None) or type(error).__name__
    message = str(error) or "Failed to fetch bucket contents."
    detail = getattr(error, "detail", None) or str(error)

    if code in AUTH_ERROR_CODES:
        kind = ListingErrorKind.auth_failure
    elif code in CONFIG_ERROR_CODES:
        kind = ListingErrorKind.misconfigured
    else:
        kind = ListingErrorKind.transient

    lowered = detail.lower()
    network = code in NETWORK_ERROR_CODES or any(
        marker in lowered for marker in NETWORK_MESSAGE_MARKERS
    )

    return ListingError(
        kind=kind,
        description=NETWORK_HINT if network else message,
        likely_misconfiguration=network,
    )


class ListingEngine:
    """Converts one delimited listing into folder-first navigation items."""

    def __init__(self, store_client: StoreClient, bucket: str):
        self.store_client = store_client
        self.bucket = bucket

    def list(self, prefix: str) -> list[NavigationItem]:
        """List the items directly under a prefix.

        Folders come first, then files, each in the order the store returned
        them. The folder's own placeholder object and zero-byte markers are
        left out.

        Raises:
            ListingError: If the store call fails
        """
        with tracer.start_as_current_span("s3_navigator.list") as span:
            span.set_attribute("s3.bucket", self.bucket)
            span.set_attribute("s3.prefix", prefix)
            try:
                raw = self.store_client.list_one_prefix_level(self.bucket, prefix)
            except Exception as e:
                if not isinstance(e, StoreClientError):
                    logger.exception("Unexpected store failure", prefix=prefix)
                error = classify_listing_failure(e)
                logger.error(
                    "Listing failed",
                    bucket=self.bucket,
                    prefix=prefix,
                    kind=error.kind.value,
                    likely_misconfiguration=error.likely_misconfiguration,
                )
                raise error from e

        items: list[NavigationItem] = [
            FolderItem(prefix=folder.prefix) for folder in raw.folders
        ]
        items.extend(
            FileItem(key=f.key, size=f.size, last_modified=f.last_modified)
            for f in raw.files
            if f.key != prefix and f.size > 0
        )

        logger.info(
            "Folder listed",
            bucket=self.bucket,
            prefix=prefix,
            item_count=len(items),
        )
        return items
