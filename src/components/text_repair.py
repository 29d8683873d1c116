# ============================================================================
# text_repair.py — Türkçe Karakter Onarımı (Mojibake Düzeltme)
# ============================================================================
# NEDEN BU DOSYA VAR?
#   Satış veritabanından (SQL Server, CP1254 kolonlar) gelen metinler
#   sürücü katmanında yanlış çözülüyor: Türkçe kod sayfasındaki byte'lar
#   Latin-1 sanılarak Unicode'a çevrilmiş. Sonuç:
#       "İSTANBUL" → "ÝSTANBUL",  "Şişli" → "Þiþli"
#   Bu modül tek bir string'i olabildiğince geri kazanır.
#
# AKIŞ (her adım bir öncekinin çıktısıyla çalışır):
#   1. reinterpret_codepage   → latin-1 byte'larına dön, cp1254 olarak çöz
#   2. replace_known_sequences → bilinen bozuk dizileri tablodan değiştir
#   3. repair_question_marks  → kalan "?" için komşu harf tahmini
#   4. strip_artifacts        → baştaki noktaları ve boşlukları temizle
#
# ÖNEMLİ:
#   - Hiçbir adım hata fırlatmaz. 1. adım başarısız olursa metin olduğu gibi
#     kalır, 2-4. adımlar yine uygulanır.
#   - 3. adım bir TAHMİNDİR. Temiz metinde de "?" varsa değiştirebilir.
#     apply_heuristics=False ile kapatılabilir.
#
# ÇAĞRILIŞ ŞEKLİ:
#   from src.components.text_repair import repair_text
#   repair_text("ÝSTANBUL")   # → "İSTANBUL"
# ============================================================================

import re

from src.logger import logging


# Veritabanı sürücüsünün yanlışlıkla kullandığı kod sayfası ve gerçek kaynak
LATIN1 = "latin-1"
TURKISH_CODEPAGE = "cp1254"


# ─────────────────────────────────────────────────────────────────────────────
# DEĞİŞTİRME TABLOSU — Sıra Önemli!
# ─────────────────────────────────────────────────────────────────────────────
# İlk 12 satır: UTF-8 byte çiftlerinin cp1252/latin-1 ile okunmuş halleri.
# Sonraki 2 satır: tek başına kalan artık karakterler (silinir).
# Son 6 satır: 1. adım atlanmışsa hâlâ duran tek byte'lık cp1254 harfleri.
#
# Tablo sırası sabittir; her desen tüm geçişleriyle değiştirilip sonra
# bir sonrakine geçilir.

REPLACEMENT_TABLE = (
    ("\u00c4\u00b0", "\u0130"),  # Ä° → İ
    ("\u00c4\u00b1", "\u0131"),  # Ä± → ı
    ("\u00c5\u0178", "\u015f"),  # ÅŸ → ş
    ("\u00c5\u017e", "\u015e"),  # Åž → Ş
    ("\u00c3\u00a7", "\u00e7"),  # Ã§ → ç
    ("\u00c3\u2021", "\u00c7"),  # Ã‡ → Ç
    ("\u00c4\u0178", "\u011f"),  # ÄŸ → ğ
    ("\u00c4\u017e", "\u011e"),  # Äž → Ğ
    ("\u00c3\u00bc", "\u00fc"),  # Ã¼ → ü
    ("\u00c3\u0153", "\u00dc"),  # Ãœ → Ü
    ("\u00c3\u00b6", "\u00f6"),  # Ã¶ → ö
    ("\u00c3\u2013", "\u00d6"),  # Ã– → Ö
    ("\u00c2", ""),              # Â (artık byte)
    ("\ufffd", ""),              # � (çözülemeyen karakter)
    ("\u00dd", "\u0130"),        # Ý → İ
    ("\u00fd", "\u0131"),        # ý → ı
    ("\u00de", "\u015e"),        # Þ → Ş
    ("\u00fe", "\u015f"),        # þ → ş
    ("\u00d0", "\u011e"),        # Ð → Ğ
    ("\u00f0", "\u011f"),        # ð → ğ
)

# 1. adımdan sonra hâlâ bozulma izi var mı? ("?" veya U+0080–U+00FF)
_RESIDUAL_PATTERN = re.compile("[?\u0080-\u00ff]")


# ─────────────────────────────────────────────────────────────────────────────
# "?" TAHMİN KURALLARI
# ─────────────────────────────────────────────────────────────────────────────
# Kaynak sistemde bir Türkçe harf daha önceki bir dönüşümde "?" olmuş.
# Hangi harf olduğu kesin bilinemez; komşu harflere göre en olası tahmin:
#   ?A, ?E        → İA, İE     (ISTANBUL başındaki ?)
#   KAYSER?       → KAYSERİ    (büyük ünsüzden sonra)
#   Kad?köy       → Kadıköy    (küçük ünsüzden önce)
#   s?ra          → sıra       (küçük ünsüz ile ünlü arasında)
# Sıra ve desenler ampirik olarak ayarlanmıştır, değiştirmeyin.

QUESTION_MARK_RULES = (
    (re.compile(r"\?([AEIOU])"), "\u0130\\1"),
    (re.compile(r"([BCDFGHJKLMNPQRSTVWXYZ])\?"), "\\1\u0130"),
    (re.compile(r"\?([bcdfghjklmnpqrstvwxyz])"), "\u0131\\1"),
    (re.compile(r"([bcdfghjklmnpqrstvwxyz])\?([aeiou])"), "\\1\u0131\\2"),
)

_LEADING_DOTS = re.compile(r"^\.+")

# Dashboard tarafındaki trim() ile aynı küme: U+FEFF (BOM) dahil,
# U+001C–U+001F ve U+0085 hariç
_TRIM_CHARS = (
    "\t\n\v\f\r \u00a0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000\ufeff"
)


# ─────────────────────────────────────────────────────────────────────────────
# ADIM 1 — BYTE YENİDEN YORUMLAMA
# ─────────────────────────────────────────────────────────────────────────────

def reinterpret_codepage(text: str) -> str:
    """
    Metni latin-1 byte'larına geri çevirip cp1254 olarak yeniden çözer.

    NEDEN?
      Sürücü cp1254 byte'larını latin-1 ile çözdüğü için her Türkçe harf
      aynı byte değerine sahip Batı Avrupa harfine dönüşmüş (0xDD → Ý).
      Code point'leri tekrar byte'a çevirip doğru kod sayfasıyla çözmek
      bu hatayı birebir geri alır.

    TANIMSIZ BYTE'LAR:
      cp1254'te karşılığı olmayan byte'lar (0x81, 0x8D-0x90, 0x9D, 0x9E)
      U+FFFD olur, metnin geri kalanı yine çözülür. 2. adım çalışırsa
      tablo bu karakteri siler.

    BAŞARISIZLIK:
      U+00FF üstü bir karakter varsa latin-1'e kodlanamaz (metin zaten
      doğru Türkçe içeriyor olabilir: "Şişli"). Metin değiştirilmeden döner.
    """
    try:
        return text.encode(LATIN1).decode(TURKISH_CODEPAGE, errors="replace")
    except UnicodeEncodeError as e:
        logging.debug(f"Byte yorumlama atlandı ({type(e).__name__}): {e}")
        return text


# ─────────────────────────────────────────────────────────────────────────────
# ADIM 2 — BİLİNEN BOZUK DİZİLER
# ─────────────────────────────────────────────────────────────────────────────

def replace_known_sequences(text: str) -> str:
    """
    Metinde "?" veya U+0080–U+00FF aralığında karakter varsa
    REPLACEMENT_TABLE'ı sırayla uygular. Yoksa metne dokunmaz.
    """
    if not _RESIDUAL_PATTERN.search(text):
        return text

    for wrong, correct in REPLACEMENT_TABLE:
        text = text.replace(wrong, correct)
    return text


# ─────────────────────────────────────────────────────────────────────────────
# ADIM 3 — "?" BAĞLAM TAHMİNİ
# ─────────────────────────────────────────────────────────────────────────────

def repair_question_marks(text: str) -> str:
    """
    Kalan "?" karakterlerini komşu harflere göre İ veya ı ile değiştirir.

    UYARI: Kesin bir çözümleme değil, tahmindir. Doğru yazılmış ve gerçek
    soru işareti içeren metinleri de değiştirebilir ("SAAT?" → "SAATİ").
    """
    if "?" not in text:
        return text

    for pattern, replacement in QUESTION_MARK_RULES:
        text = pattern.sub(replacement, text)
    return text


# ─────────────────────────────────────────────────────────────────────────────
# ADIM 4 — TEMİZLİK
# ─────────────────────────────────────────────────────────────────────────────

def strip_artifacts(text: str) -> str:
    """Baştaki nokta dizisini ve metnin iki ucundaki boşlukları (_TRIM_CHARS) siler."""
    return _LEADING_DOTS.sub("", text).strip(_TRIM_CHARS)


# ─────────────────────────────────────────────────────────────────────────────
# ANA FONKSİYON
# ─────────────────────────────────────────────────────────────────────────────

def repair_text(value, apply_heuristics: bool = True):
    """
    Tek bir metni 4 adımda onarır.

    Args:
        value: Onarılacak metin. None, boş string veya str olmayan
            değerler olduğu gibi döner.
        apply_heuristics: False ise 3. adım ("?" tahmini) atlanır.

    Returns:
        Onarılmış metin (veya dokunulmamış orijinal değer)

    Örnek:
        >>> repair_text("ÝSTANBUL")
        'İSTANBUL'
        >>> repair_text("...Ankara ")
        'Ankara'
    """
    if not value or not isinstance(value, str):
        return value

    fixed = reinterpret_codepage(value)
    fixed = replace_known_sequences(fixed)
    if apply_heuristics:
        fixed = repair_question_marks(fixed)
    return strip_artifacts(fixed)
