from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RequestContext:
    """Where a request came from, copied onto audit events and sessions"""

    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
