"""Simple two-language (ko/en) translation helper."""

_STRINGS: dict[str, dict[str, str]] = {
    "page_title": {
        "ko": "시트스케이프",
        "en": "SeatScape",
    },
    "tagline": {
        "ko": "햇빛이 드는 창가 좌석 찾기",
        "en": "Find the sunny (or shady) side of your flight",
    },
    "label_origin": {
        "ko": "출발 공항",
        "en": "From",
    },
    "label_dest": {
        "ko": "도착 공항",
        "en": "To",
    },
    "label_date": {
        "ko": "출발 날짜",
        "en": "Departure date",
    },
    "label_time": {
        "ko": "출발 시각 (현지)",
        "en": "Departure time (local)",
    },
    "label_flight": {
        "ko": "편명 (선택)",
        "en": "Flight number (optional)",
    },
    "label_preference": {
        "ko": "선호",
        "en": "Preference",
    },
    "pref_see": {
        "ko": "해를 보고 싶어요",
        "en": "See the sun",
    },
    "pref_avoid": {
        "ko": "햇빛을 피하고 싶어요",
        "en": "Avoid glare",
    },
    "label_step": {
        "ko": "샘플 간격 (분)",
        "en": "Sample step (minutes)",
    },
    "label_threshold": {
        "ko": "도시 표시 반경 (km)",
        "en": "Pass-by radius (km)",
    },
    "label_precise": {
        "ko": "정밀 천체력 사용",
        "en": "Precise ephemeris",
    },
    "btn_compute": {
        "ko": "✦ 좌석 추천",
        "en": "✦ Recommend a seat",
    },
    "placeholder": {
        "ko": "공항과 출발 시각을 입력하세요",
        "en": "Enter airports and a departure time",
    },
    "loading_compute": {
        "ko": "✦ 햇빛 경로를 계산하는 중",
        "en": "✦ Tracing the sun along your route",
    },
    "error_airport": {
        "ko": "공항을 찾을 수 없어요. ({error})",
        "en": "Airport not found. ({error})",
    },
    "error_lookup": {
        "ko": "공항 정보 서비스에 연결하지 못했어요. ({error})",
        "en": "The airport lookup service is unavailable. ({error})",
    },
    "error_input": {
        "ko": "입력을 확인해 주세요. ({error})",
        "en": "Please check your input. ({error})",
    },
    "error_schedule": {
        "ko": "운항 정보를 불러오지 못했어요. ({error})",
        "en": "Could not load the flight schedule. ({error})",
    },
    "section_passbys": {
        "ko": "지나가는 도시",
        "en": "Pass-bys",
    },
    "sort_time": {
        "ko": "시간순",
        "en": "By time",
    },
    "sort_distance": {
        "ko": "거리순",
        "en": "By distance",
    },
    "side_left": {
        "ko": "왼쪽",
        "en": "left",
    },
    "side_right": {
        "ko": "오른쪽",
        "en": "right",
    },
    "label_scrubber": {
        "ko": "비행 시점",
        "en": "Time along flight",
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
