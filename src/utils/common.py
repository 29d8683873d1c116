# ============================================================================
# common.py — Proje Genelinde Kullanılan Yardımcı Fonksiyonlar
# ============================================================================
# NEDEN BU DOSYA VAR?
#   Config okuma ve JSON dosya işlemleri hem CLI (main.py) hem pipeline
#   tarafından kullanılır. Tek bir yerde toplanınca her modül aynı hata
#   sarmalama ve loglama davranışını paylaşır.
#
# KULLANIM ÖRNEKLERİ:
#   from src.utils.common import load_yaml, load_json, save_json
#   cfg = load_yaml("configs/config.yaml")
#   rows = load_json("data/siparisler.json")
#   save_json(repaired_rows, "output/siparisler_duzeltilmis.json")
# ============================================================================

import os
import sys
import json
import yaml

from src.exception import CustomException
from src.logger import logging


# ─────────────────────────────────────────────────────────────────────────────
# 1) YAML İŞLEMLERİ — Config Dosyalarını Okuma
# ─────────────────────────────────────────────────────────────────────────────

def load_yaml(file_path: str) -> dict:
    """
    YAML dosyasını okuyup Python dict olarak döndürür.

    Boş bir YAML dosyası None yerine {} döner; böylece çağıran taraf
    .get() zincirini güvenle kullanabilir.

    Args:
        file_path: YAML dosyasının yolu

    Returns:
        dict: YAML içeriği Python sözlüğü olarak
    """
    try:
        if not os.path.exists(file_path):
            raise FileNotFoundError(f"Config dosyası bulunamadı: {file_path}")

        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

        logging.info(f"YAML yüklendi ← {file_path}")
        return data if data is not None else {}

    except Exception as e:
        raise CustomException(e, sys)


# ─────────────────────────────────────────────────────────────────────────────
# 2) JSON İŞLEMLERİ — Kayıt Setlerini Okuma / Yazma
# ─────────────────────────────────────────────────────────────────────────────

def load_json(file_path: str):
    """
    JSON dosyasını okur. Kök eleman liste (kayıt seti) veya obje olabilir.

    Args:
        file_path: JSON dosyasının yolu

    Returns:
        list | dict: JSON içeriği
    """
    try:
        if not os.path.exists(file_path):
            raise FileNotFoundError(f"JSON dosyası bulunamadı: {file_path}")

        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        logging.info(f"JSON yüklendi ← {file_path}")
        return data

    except Exception as e:
        raise CustomException(e, sys)


def save_json(data, file_path: str) -> None:
    """
    Veriyi JSON dosyası olarak kaydeder.

    ensure_ascii=False: Onarılmış Türkçe karakterler "\\u0130" kaçışına
    dönüşmeden, okunur halde yazılır. Tarih gibi JSON'a doğrudan
    çevrilemeyen değerler ISO formatında string'e çevrilir.

    Args:
        data: Kaydedilecek liste/sözlük
        file_path: Hedef dosya yolu
    """
    try:
        dir_path = os.path.dirname(file_path)
        if dir_path:
            os.makedirs(dir_path, exist_ok=True)

        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2, default=_json_default)

        logging.info(f"JSON kaydedildi → {file_path}")

    except Exception as e:
        raise CustomException(e, sys)


def _json_default(value):
    """datetime/date/Decimal gibi tipleri JSON'a uygun hale getirir."""
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)
