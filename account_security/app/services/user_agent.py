"""
Device detection from a User-Agent header.
"""

from dataclasses import dataclass
from typing import Optional

from account_security.domain.entities import DeviceType


@dataclass(frozen=True)
class DeviceInfo:
    name: str
    device_type: DeviceType


def _browser(user_agent: str) -> Optional[str]:
    # Order matters: Edge and Opera also announce Chrome, Chrome announces Safari
    if "Edg" in user_agent:
        return "Edge"
    if "OPR" in user_agent or "Opera" in user_agent:
        return "Opera"
    if "Firefox" in user_agent:
        return "Firefox"
    if "Chrome" in user_agent:
        return "Chrome"
    if "Safari" in user_agent:
        return "Safari"
    return None


def describe_device(user_agent: Optional[str]) -> DeviceInfo:
    if not user_agent:
        return DeviceInfo(name="Unknown Device", device_type=DeviceType.web)

    if "iPhone" in user_agent:
        name, device_type = "iPhone", DeviceType.mobile
    elif "iPad" in user_agent:
        name, device_type = "iPad", DeviceType.mobile
    elif "Android" in user_agent:
        name, device_type = "Android Device", DeviceType.mobile
    elif "Windows" in user_agent:
        name, device_type = "Windows PC", DeviceType.web
    elif "Macintosh" in user_agent or "Mac OS" in user_agent:
        name, device_type = "Mac", DeviceType.web
    elif "Linux" in user_agent:
        name, device_type = "Linux PC", DeviceType.web
    else:
        name, device_type = "Unknown Device", DeviceType.web

    browser = _browser(user_agent)
    if browser:
        name = f"{name} - {browser}"
    return DeviceInfo(name=name, device_type=device_type)
