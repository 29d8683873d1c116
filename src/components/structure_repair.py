# ============================================================================
# structure_repair.py — İç İçe Veri Yapılarında Türkçe Karakter Onarımı
# ============================================================================
# NEDEN BU DOSYA VAR?
#   Veritabanından gelen kayıtlar tek bir string değil; satır listeleri,
#   satır içinde alt listeler (sipariş kalemleri), tarih ve sayı alanları.
#   API her yanıtı dönmeden önce bu yapıyı dolaşıp SADECE metinleri onarır.
#
# KURALLAR:
#   str              → repair_text
#   datetime / date  → dokunulmaz (aynı nesne döner)
#   dict / Mapping   → anahtarlar ve sıraları korunur, değerler onarılır
#   list / tuple     → sıra ve tip korunur, elemanlar onarılır
#   diğer her şey    → dokunulmaz (int, float, Decimal, bool, None, bytes)
#
# KULLANIM:
#   repair_structure({"name": "ÝSTANBUL", "createdAt": datetime(...)})
#   repair_records(cursor_rows)       # satır listesi
#   repair_dataframe(df)              # pandas kayıt seti
# ============================================================================

from collections.abc import Mapping
from datetime import date, datetime, time
from typing import Iterable, Optional

import pandas as pd
from pandas.api.types import is_object_dtype, is_string_dtype

from src.components.text_repair import repair_text


# pd.Timestamp datetime'ın alt sınıfıdır, ayrıca listelemeye gerek yok
TIMESTAMP_TYPES = (datetime, date, time)


# ─────────────────────────────────────────────────────────────────────────────
# ÖZYİNELEMELİ YAPI ONARIMI
# ─────────────────────────────────────────────────────────────────────────────

def repair_structure(value, apply_heuristics: bool = True):
    """
    Herhangi bir derinlikteki yapıyı dolaşıp metin yapraklarını onarır.

    Girdi değiştirilmez; sözlük ve listeler için yeni nesne üretilir.
    Metin olmayan yapraklar aynı nesne olarak (identity) döner.

    Args:
        value: str, sayı, bool, None, tarih, liste/tuple veya sözlük
        apply_heuristics: "?" tahmin adımı uygulansın mı

    Returns:
        Aynı şekilde, metinleri onarılmış yapı
    """
    if isinstance(value, str):
        return repair_text(value, apply_heuristics=apply_heuristics)

    if isinstance(value, TIMESTAMP_TYPES):
        return value

    if isinstance(value, Mapping):
        return {
            key: repair_structure(item, apply_heuristics=apply_heuristics)
            for key, item in value.items()
        }

    if isinstance(value, (list, tuple)):
        repaired = [
            repair_structure(item, apply_heuristics=apply_heuristics)
            for item in value
        ]
        if isinstance(value, list):
            return repaired
        # namedtuple (ör. DB-API satırları) alanları pozisyonel alır
        if hasattr(value, "_fields"):
            return type(value)(*repaired)
        return type(value)(repaired)

    return value


# ─────────────────────────────────────────────────────────────────────────────
# KAYIT ODAKLI YARDIMCILAR
# ─────────────────────────────────────────────────────────────────────────────

def repair_object(record, apply_heuristics: bool = True):
    """
    Tek bir kaydın (satır sözlüğü) tüm alanlarını onarır.

    Boş/None kayıt olduğu gibi döner.
    """
    if not record:
        return record
    return repair_structure(record, apply_heuristics=apply_heuristics)


def repair_records(records, apply_heuristics: bool = True):
    """
    Kayıt listesindeki her satırı onarır.

    Liste olmayan girdi (None, tek sözlük vb.) olduğu gibi döner; tek kayıt
    için repair_object kullanılmalı.
    """
    if not records or not isinstance(records, list):
        return records
    return [repair_object(row, apply_heuristics=apply_heuristics) for row in records]


def repair_dataframe(
    df: pd.DataFrame,
    columns: Optional[Iterable[str]] = None,
    apply_heuristics: bool = True,
) -> pd.DataFrame:
    """
    pandas kayıt setindeki metin hücrelerini onarır.

    NEDEN?
      Raporlama sorguları pd.read_sql ile DataFrame'e alındığında satır
      satır dict'e çevirmek yerine sütun bazlı onarım daha okunur.

    Args:
        df: Kayıt seti
        columns: Onarılacak sütunlar. None ise tüm object dtype sütunlar.
        apply_heuristics: "?" tahmin adımı uygulansın mı

    Returns:
        pd.DataFrame: Kopya. Index, sütun sırası ve metin olmayan hücreler
        (sayı, tarih, NaN) korunur.
    """
    result = df.copy()
    if columns is None:
        columns = [
            c for c in result.columns
            if is_object_dtype(result[c].dtype) or is_string_dtype(result[c].dtype)
        ]

    for col in columns:
        result[col] = result[col].map(
            lambda cell: repair_text(cell, apply_heuristics=apply_heuristics)
            if isinstance(cell, str) else cell
        )
    return result


# ─────────────────────────────────────────────────────────────────────────────
# RAPORLAMA
# ─────────────────────────────────────────────────────────────────────────────

def count_changed_strings(before, after) -> int:
    """
    İki yapı arasında değeri değişmiş metin yaprağı sayısını döndürür.

    repair_structure çıktısıyla girdisini karşılaştırmak için tasarlandı;
    şekilleri aynı kabul edilir.
    """
    if isinstance(before, str):
        return int(before != after)

    if isinstance(before, Mapping) and isinstance(after, Mapping):
        return sum(
            count_changed_strings(item, after.get(key))
            for key, item in before.items()
        )

    if isinstance(before, (list, tuple)) and isinstance(after, (list, tuple)):
        return sum(count_changed_strings(b, a) for b, a in zip(before, after))

    return 0
