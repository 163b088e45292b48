"""
Localization of explanation notes.

Each locale maps every ``NoteCode`` to a ``str.format`` template whose
placeholders are the note's ``params``. Adding a locale means adding one
catalog; the scoring core never changes.

Supported locales: ``en`` (English), ``tr`` (Turkish).
"""

from __future__ import annotations

from trade_confidence.models.note import Note, NoteCode

_EN: dict[NoteCode, str] = {
    NoteCode.ECHO_DATA_MISSING: "No echo edge data available",
    NoteCode.ECHO_SMALL_SAMPLE_PENALTY: "Echo sampleSize={sample_size} -> -{penalty} penalty",
    NoteCode.ECHO_VERY_SMALL_SAMPLE_PENALTY: "Echo sampleSize={sample_size} (very small) -> -{penalty} penalty",
    NoteCode.CLARITY_HEDGED_PENALTY: "Analysis used hedged language -> -{penalty} penalty",
    NoteCode.CLARITY_HIGH_AMBIGUITY: "High ambiguity detected in event analysis ({ambiguity})",
    NoteCode.MARKET_STATS_MISSING: "Market stats unavailable",
    NoteCode.VOLATILITY_ELEVATED: "ATR% elevated ({atr_pct}%) -> size scaled down",
    NoteCode.GAP_DATA_MISSING: "Gap data unavailable",
    NoteCode.GAP_LARGE: "Large gap detected ({gap_pct}%) -> increased risk",
    NoteCode.NEWS_AGED_PENALTY: "News is {age_hours}h old -> -{penalty} freshness penalty",
    NoteCode.STOP_FROM_ATR: "Stop distance based on ATR",
    NoteCode.STOP_DEFAULTED: "Stop distance defaulted (no price levels)",
    NoteCode.POSITION_DEFAULTED: "Position size defaulted",
    NoteCode.LOW_CONFIDENCE: "Overall confidence ({overall}%) below threshold",
    NoteCode.WEAK_COMPONENTS: "Multiple weak component scores",
    NoteCode.ECHO_SAMPLE_TOO_SMALL: "Echo sample size too small (n={sample_size})",
    NoteCode.INSUFFICIENT_HISTORY: "Insufficient historical data for reliable signal",
    NoteCode.ECHO_ACCURACY_TOO_LOW: "Echo accuracy too low ({accuracy}%)",
    NoteCode.PATTERN_UNRELIABLE: "Historical pattern unreliable",
    NoteCode.DIRECTION_CONFLICT: "Echo pattern conflicts with event analysis",
    NoteCode.CONFLICT_DIRECTIONS: "Echo suggests {pattern_direction}, analysis suggests {read_direction}",
    NoteCode.CONFLICT_STRONG_BOTH_SIDES: "Strong conviction on both sides - avoid position",
    NoteCode.VOLATILITY_TOO_HIGH: "Volatility too high (regime score: {regime_vol})",
    NoteCode.UNFAVORABLE_CONDITIONS: "Market conditions unfavorable for position",
    NoteCode.GAP_RISK_TOO_HIGH: "Gap risk too high (score: {gap_risk})",
    NoteCode.OVERNIGHT_GAP_RISK: "Recent price gaps indicate excessive overnight risk",
    NoteCode.MARGINAL_CONFIDENCE: "Marginal confidence ({overall}%) - wait for better entry",
    NoteCode.TARGET_ENTRY_LEVEL: "Target entry level: {level}",
    NoteCode.TARGET_ENTRY_PULLBACK: "Target entry level: pullback",
    NoteCode.STRONG_THESIS_GAP_RISK: "Strong thesis but elevated gap risk",
    NoteCode.WAIT_FOR_STABILITY: "Wait for price to stabilize before entry",
    NoteCode.NO_DIRECTION: "Analysis returned NONE direction",
}

_TR: dict[NoteCode, str] = {
    NoteCode.ECHO_DATA_MISSING: "Yankı verisi yok",
    NoteCode.ECHO_SMALL_SAMPLE_PENALTY: "Yankı örneklemi={sample_size} -> -{penalty} ceza",
    NoteCode.ECHO_VERY_SMALL_SAMPLE_PENALTY: "Yankı örneklemi={sample_size} (çok küçük) -> -{penalty} ceza",
    NoteCode.CLARITY_HEDGED_PENALTY: "Analizde temkinli ifade kullanıldı -> -{penalty} ceza",
    NoteCode.CLARITY_HIGH_AMBIGUITY: "Olay analizinde yüksek belirsizlik ({ambiguity})",
    NoteCode.MARKET_STATS_MISSING: "Piyasa istatistikleri yok",
    NoteCode.VOLATILITY_ELEVATED: "ATR% yüksek ({atr_pct}%) -> pozisyon küçültüldü",
    NoteCode.GAP_DATA_MISSING: "Boşluk verisi yok",
    NoteCode.GAP_LARGE: "Büyük fiyat boşluğu ({gap_pct}%) -> risk arttı",
    NoteCode.NEWS_AGED_PENALTY: "Haber {age_hours} saatlik -> -{penalty} güncellik cezası",
    NoteCode.STOP_FROM_ATR: "Stop mesafesi ATR'ye göre",
    NoteCode.STOP_DEFAULTED: "Stop mesafesi varsayılan (fiyat seviyesi yok)",
    NoteCode.POSITION_DEFAULTED: "Pozisyon büyüklüğü varsayılan",
    NoteCode.LOW_CONFIDENCE: "Genel güven ({overall}%) eşiğin altında",
    NoteCode.WEAK_COMPONENTS: "Birden fazla zayıf bileşen skoru",
    NoteCode.ECHO_SAMPLE_TOO_SMALL: "Yankı örneklemi çok küçük (n={sample_size})",
    NoteCode.INSUFFICIENT_HISTORY: "Güvenilir sinyal için yetersiz geçmiş veri",
    NoteCode.ECHO_ACCURACY_TOO_LOW: "Yankı isabeti çok düşük ({accuracy}%)",
    NoteCode.PATTERN_UNRELIABLE: "Geçmiş örüntü güvenilir değil",
    NoteCode.DIRECTION_CONFLICT: "Yankı örüntüsü olay analiziyle çelişiyor",
    NoteCode.CONFLICT_DIRECTIONS: "Yankı {pattern_direction}, analiz {read_direction} öneriyor",
    NoteCode.CONFLICT_STRONG_BOTH_SIDES: "Her iki tarafta da güçlü kanaat - pozisyondan kaçının",
    NoteCode.VOLATILITY_TOO_HIGH: "Volatilite çok yüksek (rejim skoru: {regime_vol})",
    NoteCode.UNFAVORABLE_CONDITIONS: "Piyasa koşulları pozisyon için elverişsiz",
    NoteCode.GAP_RISK_TOO_HIGH: "Boşluk riski çok yüksek (skor: {gap_risk})",
    NoteCode.OVERNIGHT_GAP_RISK: "Son fiyat boşlukları aşırı gece riskine işaret ediyor",
    NoteCode.MARGINAL_CONFIDENCE: "Sınırda güven ({overall}%) - daha iyi giriş bekleyin",
    NoteCode.TARGET_ENTRY_LEVEL: "Hedef giriş seviyesi: {level}",
    NoteCode.TARGET_ENTRY_PULLBACK: "Hedef giriş seviyesi: geri çekilme",
    NoteCode.STRONG_THESIS_GAP_RISK: "Güçlü tez ancak yüksek boşluk riski",
    NoteCode.WAIT_FOR_STABILITY: "Girişten önce fiyatın dengelenmesini bekleyin",
    NoteCode.NO_DIRECTION: "Analiz yön belirtmedi (NONE)",
}

CATALOGS: dict[str, dict[NoteCode, str]] = {
    "en": _EN,
    "tr": _TR,
}


def render_note(item: Note, locale: str = "en") -> str:
    """Render one note in ``locale``.

    Raises:
        ValueError: If ``locale`` has no catalog.
    """
    catalog = CATALOGS.get(locale.lower())
    if catalog is None:
        raise ValueError(f"Unsupported locale '{locale}'. Must be one of {sorted(CATALOGS)}.")
    return catalog[item.code].format(**item.params)


def render_notes(items: list[Note], locale: str = "en") -> list[str]:
    return [render_note(item, locale) for item in items]
