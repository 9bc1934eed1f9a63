"""Simple two-language (ko/en) translation helper."""

_STRINGS: dict[str, dict[str, str]] = {
    "page_title": {
        "ko": "태양 위치",
        "en": "SunPos",
    },
    "label_place": {
        "ko": "장소",
        "en": "Location",
    },
    "label_date": {
        "ko": "날짜",
        "en": "Date",
    },
    "label_time": {
        "ko": "시각 (현지)",
        "en": "Time (local)",
    },
    "btn_locate_sun": {
        "ko": "☀ 태양 찾기",
        "en": "☀ Locate Sun",
    },
    "metric_azimuth": {
        "ko": "방위각",
        "en": "Azimuth",
    },
    "metric_zenith": {
        "ko": "천정각",
        "en": "Zenith angle",
    },
    "metric_elevation": {
        "ko": "고도",
        "en": "Elevation",
    },
    "below_horizon": {
        "ko": "태양이 지평선 아래에 있어요.",
        "en": "The sun is below the horizon.",
    },
    "placeholder": {
        "ko": "장소와 시각을 입력하고 태양의 위치를 확인하세요",
        "en": "Enter a location and time to see where the sun is",
    },
    "loading_compute": {
        "ko": "☀ 태양 위치를 계산하는 중",
        "en": "☀ Computing the sun position",
    },
    "error_address": {
        "ko": "주소를 찾을 수 없어요. 띄어쓰기를 포함해서 입력해보세요. ({error})",
        "en": "Address not found. Try a more specific address. ({error})",
    },
}


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("en") or key
