from account_security.app.services.user_agent import describe_device
from account_security.domain.entities import DeviceType

CHROME_WINDOWS = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
EDGE_WINDOWS = CHROME_WINDOWS + " Edg/120.0.0.0"
SAFARI_IPHONE = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1"
)
FIREFOX_LINUX = "Mozilla/5.0 (X11; Linux x86_64; rv:121.0) Gecko/20100101 Firefox/121.0"
CHROME_ANDROID = (
    "Mozilla/5.0 (Linux; Android 14; Pixel 8) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Mobile Safari/537.36"
)


def test_desktop_browsers():
    assert describe_device(CHROME_WINDOWS).name == "Windows PC - Chrome"
    assert describe_device(EDGE_WINDOWS).name == "Windows PC - Edge"
    assert describe_device(FIREFOX_LINUX).name == "Linux PC - Firefox"
    assert describe_device(CHROME_WINDOWS).device_type == DeviceType.web


def test_mobile_devices():
    iphone = describe_device(SAFARI_IPHONE)
    android = describe_device(CHROME_ANDROID)

    assert iphone.name == "iPhone - Safari"
    assert iphone.device_type == DeviceType.mobile
    assert android.name == "Android Device - Chrome"
    assert android.device_type == DeviceType.mobile


def test_missing_or_unknown_user_agent():
    assert describe_device(None).name == "Unknown Device"
    assert describe_device("curl/8.4.0").name == "Unknown Device"
