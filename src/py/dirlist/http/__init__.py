from .model import HTTPRequest, HTTPResponse, HTTPHeaders  # NOQA: F401
from .status import HTTP_STATUS  # NOQA: F401

# EOF
