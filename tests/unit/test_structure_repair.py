# ============================================================================
# test_structure_repair.py — src/components/structure_repair.py için Testler
# ============================================================================
# TEST EDİLEN FONKSİYONLAR:
#   repair_structure, repair_object, repair_records, repair_dataframe,
#   count_changed_strings
#
# TEST STRATEJİSİ:
#   - Metin olmayan yapraklar için identity (aynı nesne) kontrolü
#   - Sözlük anahtar sırası ve liste sırası korunuyor mu?
#   - Tarih alanları bit-bit aynı kalıyor mu?
# ============================================================================

import copy
from collections import namedtuple
from datetime import date, datetime, time
from decimal import Decimal

import pandas as pd
import pytest


# ─────────────────────────────────────────────────────────────────────────────
# repair_structure — Identity Kuralı
# ─────────────────────────────────────────────────────────────────────────────

class TestIdentityForNonText:
    """Metin olmayan değerler aynı nesne olarak dönmeli."""

    @pytest.mark.parametrize(
        "value",
        [
            42,
            3.14,
            True,
            False,
            None,
            Decimal("1250.50"),
            b"\xdd\xfe",
            datetime(2025, 1, 31, 23, 59),
            date(2025, 1, 31),
            time(8, 15),
            pd.Timestamp("2025-03-14 09:30"),
        ],
    )
    def test_scalar_returned_by_identity(self, value):
        from src.components.structure_repair import repair_structure
        assert repair_structure(value) is value

    def test_empty_string_unchanged(self):
        from src.components.structure_repair import repair_structure
        assert repair_structure("") == ""


# ─────────────────────────────────────────────────────────────────────────────
# repair_structure — İç İçe Yapılar
# ─────────────────────────────────────────────────────────────────────────────

class TestNestedStructure:
    """Sözlük ve liste dolaşımı testleri."""

    def test_nested_order_fixture(self, corrupted_order, created_at):
        """name ve tüm label'lar düzelmeli, createdAt aynı nesne kalmalı."""
        from src.components.structure_repair import repair_structure

        result = repair_structure(corrupted_order)

        assert result["name"] == "İSTANBUL Şube"
        assert [item["label"] for item in result["items"]] == [
            "Şişli Dağıtım",
            "Kadıköy",
        ]
        assert result["createdAt"] is created_at

    def test_key_order_preserved(self, corrupted_order):
        """Sözlük anahtarlarının sırası değişmemeli."""
        from src.components.structure_repair import repair_structure

        result = repair_structure(corrupted_order)

        assert list(result.keys()) == list(corrupted_order.keys())
        assert list(result["items"][0].keys()) == ["label", "qty"]

    def test_non_text_fields_untouched(self, corrupted_order):
        """Sayı, bool ve None alanlar aynen kalmalı."""
        from src.components.structure_repair import repair_structure

        result = repair_structure(corrupted_order)

        assert result["total"] == 1250.5
        assert result["approved"] is True
        assert result["note"] is None
        assert result["items"][1]["qty"] == 5

    def test_input_not_mutated(self, corrupted_order):
        """Girdi yapısı yerinde değiştirilmemeli."""
        from src.components.structure_repair import repair_structure

        snapshot = copy.deepcopy(corrupted_order)
        repair_structure(corrupted_order)

        assert corrupted_order == snapshot

    def test_list_of_strings(self):
        """Düz metin listesi sırası korunarak onarılmalı."""
        from src.components.structure_repair import repair_structure
        assert repair_structure(["ÝZMÝR", "ANKARA", "Þiþli"]) == ["İZMİR", "ANKARA", "Şişli"]

    def test_tuple_type_preserved(self):
        """tuple girdi tuple olarak dönmeli."""
        from src.components.structure_repair import repair_structure

        result = repair_structure(("ÝSTANBUL", 7))

        assert isinstance(result, tuple)
        assert result == ("İSTANBUL", 7)

    def test_namedtuple_row_preserved(self):
        """DB-API namedtuple satırları aynı tipte dönmeli."""
        from src.components.structure_repair import repair_structure

        Row = namedtuple("Row", ["musteri", "tutar"])
        result = repair_structure(Row("Þiþli Ltd.", 99))

        assert isinstance(result, Row)
        assert result.musteri == "Şişli Ltd."
        assert result.tutar == 99

    def test_deeply_nested(self):
        """Derin iç içe yapılarda da en alttaki metin onarılmalı."""
        from src.components.structure_repair import repair_structure

        value = {"a": [{"b": [{"c": ["ÇAÐRI"]}]}]}
        assert repair_structure(value) == {"a": [{"b": [{"c": ["ÇAĞRI"]}]}]}

    def test_heuristics_flag_forwarded(self):
        """apply_heuristics=False tüm yapraklara iletilmeli."""
        from src.components.structure_repair import repair_structure

        value = {"il": "KAYSER?", "ilceler": ["MERS?N"]}
        result = repair_structure(value, apply_heuristics=False)

        assert result == {"il": "KAYSER?", "ilceler": ["MERS?N"]}


# ─────────────────────────────────────────────────────────────────────────────
# repair_object / repair_records
# ─────────────────────────────────────────────────────────────────────────────

class TestRecordHelpers:
    """Kayıt odaklı yardımcıların testleri."""

    def test_repair_object_none(self):
        from src.components.structure_repair import repair_object
        assert repair_object(None) is None

    def test_repair_object_empty(self):
        from src.components.structure_repair import repair_object
        assert repair_object({}) == {}

    def test_repair_object_fields(self, created_at):
        from src.components.structure_repair import repair_object

        row = {"CARI_ISIM": "ÖZDEMÝR TÝCARET", "TARIH": created_at}
        result = repair_object(row)

        assert result["CARI_ISIM"] == "ÖZDEMİR TİCARET"
        assert result["TARIH"] is created_at

    def test_repair_records_rows(self):
        """Her satır onarılmalı, satır sırası korunmalı."""
        from src.components.structure_repair import repair_records

        rows = [{"il": "ÝZMÝR"}, {"il": "ANKARA"}, {"il": "MUÐLA"}]
        assert repair_records(rows) == [{"il": "İZMİR"}, {"il": "ANKARA"}, {"il": "MUĞLA"}]

    def test_repair_records_non_list_returned_as_is(self):
        """Liste olmayan girdi olduğu gibi dönmeli."""
        from src.components.structure_repair import repair_records

        single = {"il": "ÝZMÝR"}
        assert repair_records(single) is single
        assert repair_records(None) is None

    def test_repair_records_empty(self):
        from src.components.structure_repair import repair_records
        assert repair_records([]) == []


# ─────────────────────────────────────────────────────────────────────────────
# repair_dataframe
# ─────────────────────────────────────────────────────────────────────────────

class TestRepairDataFrame:
    """pandas kayıt seti onarımı."""

    @pytest.fixture
    def sales_df(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "musteri": ["ÝSTANBUL GIDA", None, "Þiþli Ýnþaat"],
                "bolge": ["MARMARA", "EGE", "MARMARA"],
                "tutar": [1500.0, 250.5, 980.0],
                "tarih": pd.to_datetime(["2025-01-05", "2025-02-10", "2025-03-15"]),
            },
            index=[10, 11, 12],
        )

    def test_text_cells_repaired(self, sales_df):
        from src.components.structure_repair import repair_dataframe

        result = repair_dataframe(sales_df)

        assert result.loc[10, "musteri"] == "İSTANBUL GIDA"
        assert result.loc[12, "musteri"] == "Şişli İnşaat"
        assert pd.isna(result.loc[11, "musteri"])

    def test_non_text_columns_untouched(self, sales_df):
        """Sayı ve tarih sütunları birebir aynı kalmalı."""
        from src.components.structure_repair import repair_dataframe

        result = repair_dataframe(sales_df)

        pd.testing.assert_series_equal(result["tutar"], sales_df["tutar"])
        pd.testing.assert_series_equal(result["tarih"], sales_df["tarih"])

    def test_index_and_columns_preserved(self, sales_df):
        from src.components.structure_repair import repair_dataframe

        result = repair_dataframe(sales_df)

        assert list(result.index) == [10, 11, 12]
        assert list(result.columns) == ["musteri", "bolge", "tutar", "tarih"]

    def test_original_not_modified(self, sales_df):
        """Girdi DataFrame'i değişmemeli (kopya döner)."""
        from src.components.structure_repair import repair_dataframe

        repair_dataframe(sales_df)

        assert sales_df.loc[10, "musteri"] == "ÝSTANBUL GIDA"

    def test_selected_columns_only(self):
        """columns verilirse sadece o sütunlar onarılmalı."""
        from src.components.structure_repair import repair_dataframe

        df = pd.DataFrame({"a": ["ÝZMÝR"], "b": ["ÝZMÝR"]})
        result = repair_dataframe(df, columns=["a"])

        assert result.loc[0, "a"] == "İZMİR"
        assert result.loc[0, "b"] == "ÝZMÝR"


# ─────────────────────────────────────────────────────────────────────────────
# count_changed_strings
# ─────────────────────────────────────────────────────────────────────────────

class TestCountChangedStrings:
    """Değişen metin yaprağı sayımı."""

    def test_counts_only_changed_text(self, corrupted_order):
        from src.components.structure_repair import count_changed_strings, repair_structure

        repaired = repair_structure(corrupted_order)

        # name + iki label değişti; sayılar/tarih sayılmaz
        assert count_changed_strings(corrupted_order, repaired) == 3

    def test_identical_structures(self):
        from src.components.structure_repair import count_changed_strings
        value = {"a": ["x", 1], "b": None}
        assert count_changed_strings(value, value) == 0

    def test_scalar_string(self):
        from src.components.structure_repair import count_changed_strings
        assert count_changed_strings("ÝZMÝR", "İZMİR") == 1
        assert count_changed_strings(5, 6) == 0
