# ============================================================================
# sql_encoding.py — Veritabanına Yazarken Türkçe Karakter Dönüşümü
# ============================================================================
# text_repair.py'nin ters yönü: doğru Unicode metni, sürücünün latin-1
# olarak gönderip kolonda cp1254 byte'ı olarak saklanacağı forma çevirir.
#
#   "Şişli"  →  "Þiþli"   (her harf kendi cp1254 byte değerindeki code point)
#
# cp1254'te karşılığı olmayan karakterler "?" olur.
# ============================================================================

from src.components.text_repair import LATIN1, TURKISH_CODEPAGE


def to_sql_text(value):
    """
    Metni cp1254 byte'larına kodlayıp her byte'ı tek bir latin-1 code
    point'i olarak döndürür.

    Args:
        value: Veritabanına yazılacak metin. None, boş veya str olmayan
            değerler olduğu gibi döner.

    Returns:
        str: "binary string" formunda metin
    """
    if not value or not isinstance(value, str):
        return value

    return value.encode(TURKISH_CODEPAGE, errors="replace").decode(LATIN1)
