import logging

from .exceptions import AndroidUtilsError, ConfigurationError, TLSUnavailableError
from .env_settings import Settings, get_settings, load_settings
from .stream import DEFAULT_BUFFER_SIZE, copy, copy_file
from .tasks import execute_async_task, shutdown_executor
from .http_client import (
    ConnectionStream,
    HttpConnection,
    build_http_connection,
    create_http_client,
    create_ssl_context,
    download_url,
)
from .utils.platform_version import (
    VersionCode,
    get_platform,
    sdk_int,
    is_at_least,
    is_kitkat_or_higher,
    is_jelly_bean_mr1_or_higher,
    is_jelly_bean_or_higher,
    is_ics_or_higher,
    is_honeycomb_or_higher,
    is_gingerbread_or_higher,
    is_froyo_or_higher,
    is_ext_storage_available,
)
from .utils.connectivity import NetworkContext, is_network_connected, is_wifi_connected

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AndroidUtilsError",
    "ConfigurationError",
    "TLSUnavailableError",
    "Settings",
    "get_settings",
    "load_settings",
    "DEFAULT_BUFFER_SIZE",
    "copy",
    "copy_file",
    "execute_async_task",
    "shutdown_executor",
    "ConnectionStream",
    "HttpConnection",
    "build_http_connection",
    "create_http_client",
    "create_ssl_context",
    "download_url",
    "VersionCode",
    "get_platform",
    "sdk_int",
    "is_at_least",
    "is_kitkat_or_higher",
    "is_jelly_bean_mr1_or_higher",
    "is_jelly_bean_or_higher",
    "is_ics_or_higher",
    "is_honeycomb_or_higher",
    "is_gingerbread_or_higher",
    "is_froyo_or_higher",
    "is_ext_storage_available",
    "NetworkContext",
    "is_network_connected",
    "is_wifi_connected",
]
