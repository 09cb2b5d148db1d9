# utils package
from .config import DEFAULT_TIMEOUT_MS, DEFAULT_SEQUENCE, EXIT_OK, EXIT_FAILURE
from .consola import error, warning, debug, notice, info, set_verbose, is_verbose
from .errors import ProbeError, PreconditionError, ConstructionError, ChannelError, ReplyTimeoutError
from .mac import format_mac, lookup_vendor
from .module_summary import build_module_summary
