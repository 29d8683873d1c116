# ============================================================================
# conftest.py — Pytest Ortak Fixture'lar ve Konfigürasyon
# ============================================================================
# pytest bu dosyayı otomatik bulur ve içindeki fixture'ları TÜM test
# dosyalarına sunar.
#
# BOZUK METİN NASIL ÜRETİLİYOR?
#   Fixture'lar elle yazılmış mojibake yerine hatanın kendisini simüle eder:
#     cp1254 bozulması : doğru metin → cp1254 byte → latin-1 ile çöz
#     utf-8 bozulması  : doğru metin → utf-8 byte  → cp1252 ile çöz
#   Böylece testler "veritabanı sürücüsünün ürettiği" girdiyle çalışır.
# ============================================================================

import os
import sys
import pytest
from datetime import datetime

# Proje kökünü Python path'ine ekle — "from src..." import'ları çalışsın diye
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


# ─────────────────────────────────────────────────────────────────────────────
# TEMEL FIXTURE'LAR
# ─────────────────────────────────────────────────────────────────────────────

@pytest.fixture(scope="session")
def project_root() -> str:
    """Proje kök dizinini döndürür."""
    return PROJECT_ROOT


@pytest.fixture(scope="session")
def config_dict(project_root) -> dict:
    """configs/config.yaml içeriğini dict olarak döndürür."""
    from src.utils.common import load_yaml
    return load_yaml(os.path.join(project_root, "configs", "config.yaml"))


# ─────────────────────────────────────────────────────────────────────────────
# BOZULMA SİMÜLASYONU
# ─────────────────────────────────────────────────────────────────────────────

@pytest.fixture(scope="session")
def corrupt_cp1254():
    """
    Sürücü hatasını simüle eden fonksiyon döndürür:
    cp1254 byte'ları latin-1 sanılarak çözülür ("İSTANBUL" → "ÝSTANBUL").
    """
    def _corrupt(text: str) -> str:
        return text.encode("cp1254").decode("latin-1")
    return _corrupt


@pytest.fixture(scope="session")
def corrupt_utf8():
    """
    UTF-8 byte'larının cp1252 ile okunması ("Şişli" → "ÅžiÅŸli").
    """
    def _corrupt(text: str) -> str:
        return text.encode("utf-8").decode("cp1252")
    return _corrupt


# ─────────────────────────────────────────────────────────────────────────────
# ÖRNEK KAYITLAR
# ─────────────────────────────────────────────────────────────────────────────

@pytest.fixture
def created_at() -> datetime:
    """Kayıtlarda kullanılan sabit zaman damgası."""
    return datetime(2025, 3, 14, 9, 30, 15)


@pytest.fixture
def corrupted_order(corrupt_cp1254, created_at) -> dict:
    """
    Sipariş başlığı + kalemler şeklinde bozuk bir kayıt.
    Veritabanından dönen satırların tipik şekli.
    """
    return {
        "name": corrupt_cp1254("İSTANBUL Şube"),
        "items": [
            {"label": corrupt_cp1254("Şişli Dağıtım"), "qty": 3},
            {"label": "Kad?köy", "qty": 5},
        ],
        "total": 1250.5,
        "approved": True,
        "note": None,
        "createdAt": created_at,
    }
