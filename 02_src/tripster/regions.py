"""Supported region: the provinces of Northern Thailand."""

REGION_NAME = "ภาคเหนือ"

NORTHERN_PROVINCES = (
    "เชียงใหม่",
    "เชียงราย",
    "ลำปาง",
    "ลำพูน",
    "แม่ฮ่องสอน",
    "น่าน",
    "พะเยา",
    "แพร่",
    "อุตรดิตถ์",
)


def mentions_province(text: str) -> bool:
    """True if `text` names one of the northern provinces (case-insensitive)."""
    lowered = text.lower()
    return any(province.lower() in lowered for province in NORTHERN_PROVINCES)


def is_supported_region(destination: str) -> bool:
    """True if `destination` is a northern province or the region itself."""
    return mentions_province(destination) or REGION_NAME in destination.lower()
