# ============================================================================
# app.py — FastAPI REST API Uygulaması
# ============================================================================
# NEDEN BU DOSYA VAR?
#   Satış raporu servisleri veritabanından okudukları kayıtları kullanıcıya
#   dönmeden önce Türkçe karakter onarımından geçirir. Bu API onarımı
#   HTTP üzerinden sunar; rapor/dashboard servisleri ve veri aktarım
#   betikleri aynı kuralları buradan kullanır.
#
# ENDPOINT'LER:
#   GET  /                  → Karşılama mesajı
#   GET  /health            → Servis sağlık kontrolü
#   POST /repair/text       → Tek metin onarımı
#   POST /repair/records    → Kayıt listesi onarımı (en fazla max_batch_size)
#   POST /repair/structure  → İç içe herhangi bir JSON yapısı
#   POST /encode/sql        → Veritabanına yazmak için cp1254 dönüşümü
#
# BAŞLATMA:
#   python main.py --serve
#   veya: uvicorn app:app --host 0.0.0.0 --port 8000
#   Docs: http://localhost:8000/docs (Swagger UI)
# ============================================================================

from typing import Any, Optional
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from src.logger import logging
from src.pipeline.repair_pipeline import DEFAULT_CONFIG_PATH, RepairConfig, RepairPipeline
from src.utils.common import load_yaml


# ─────────────────────────────────────────────────────────────────────────────
# PYDANTIC MODELLER — Input / Output Doğrulama Şemaları
# ─────────────────────────────────────────────────────────────────────────────

class TextInput(BaseModel):
    """Tek metin onarımı / kodlaması için giriş şeması."""
    text: Optional[str] = Field(
        default=None,
        description="Onarılacak metin (None veya boş ise olduğu gibi döner)",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [{"text": "ÝSTANBUL Þube"}]
        }
    }


class TextOutput(BaseModel):
    """Tek metin onarımı çıkış şeması."""
    original: Optional[str]
    repaired: Optional[str]
    changed: bool = Field(description="Metin onarım sonucunda değişti mi?")


class EncodeOutput(BaseModel):
    """SQL kodlama çıkış şeması."""
    original: Optional[str]
    encoded: Optional[str]


class RecordsInput(BaseModel):
    """
    Kayıt listesi giriş şeması.

    Her kayıt serbest bir sözlüktür (sütun adı → değer). Sayı, tarih ve
    null alanlar dokunulmadan geri döner.
    """
    records: list[dict[str, Any]] = Field(
        description="Veritabanı satırları (en fazla max_batch_size)"
    )


class RecordsOutput(BaseModel):
    """Kayıt listesi onarımı çıkış şeması."""
    data: list[dict[str, Any]]
    total: int = Field(description="Toplam kayıt sayısı")
    changed: int = Field(description="Değişen metin alanı sayısı")


class StructureInput(BaseModel):
    """İç içe herhangi bir JSON değeri."""
    data: Any = None


class StructureOutput(BaseModel):
    """İç içe yapı onarımı çıkış şeması."""
    data: Any = None
    changed: int


class HealthOutput(BaseModel):
    """Sağlık kontrolü çıkış şeması."""
    status: str
    heuristics_enabled: bool
    max_batch_size: int


# ─────────────────────────────────────────────────────────────────────────────
# PIPELINE ERİŞİMİ — Uygulama Ömrüne Bağlı Tekil Nesne
# ─────────────────────────────────────────────────────────────────────────────
# Pipeline modül seviyesinde global değil, app.state üzerinde tutulur:
#   - lifespan başında kurulur, kapanışta bırakılır
#   - endpoint'lere Depends(get_pipeline) ile verilir
#   - testler app.state.pipeline'ı değiştirerek farklı config deneyebilir

def build_pipeline() -> RepairPipeline:
    """Config'i okuyup pipeline kurar; config okunamazsa varsayılanlara düşer."""
    try:
        return RepairPipeline()
    except Exception as e:
        logging.warning(f"  ⚠ Config okunamadı, varsayılan ayarlar kullanılıyor: {e}")
        return RepairPipeline(RepairConfig())


def get_pipeline(request: Request) -> RepairPipeline:
    """app.state'teki pipeline'ı döndürür; yoksa ilk kullanımda kurar."""
    pipeline = getattr(request.app.state, "pipeline", None)
    if pipeline is None:
        pipeline = build_pipeline()
        request.app.state.pipeline = pipeline
    return pipeline


# ─────────────────────────────────────────────────────────────────────────────
# LIFESPAN — Uygulama Yaşam Döngüsü Yönetimi
# ─────────────────────────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(application: FastAPI):
    """Başlangıçta pipeline'ı kurar, kapanışta bırakır."""
    logging.info("🚀 FastAPI uygulaması başlatılıyor...")
    application.state.pipeline = build_pipeline()

    yield  # Uygulama burada çalışır

    application.state.pipeline = None
    logging.info("🛑 FastAPI uygulaması kapatılıyor...")


# ─────────────────────────────────────────────────────────────────────────────
# FASTAPI UYGULAMASI
# ─────────────────────────────────────────────────────────────────────────────

def load_api_settings(file_path: str = DEFAULT_CONFIG_PATH) -> dict:
    """config.yaml → api bölümü (title, version). Okunamazsa boş dict."""
    try:
        return load_yaml(file_path).get("api") or {}
    except Exception as e:
        logging.warning(f"  ⚠ API ayarları okunamadı, varsayılanlar kullanılıyor: {e}")
        return {}


API_SETTINGS = load_api_settings()

app = FastAPI(
    title=API_SETTINGS.get("title", "Türkçe Karakter Onarım API"),
    description=(
        "Veritabanından bozuk kodlamayla gelen Türkçe metinleri onaran REST API.\n\n"
        "**Özellikler:**\n"
        "- Tek metin, kayıt listesi ve iç içe yapı onarımı\n"
        "- Tarih, sayı ve null alanlar dokunulmadan döner\n"
        "- Veritabanına yazmak için cp1254 dönüşümü"
    ),
    version=str(API_SETTINGS.get("version", "1.0.0")),
    lifespan=lifespan,
)

# Dashboard frontend'i farklı port'tan çağırır
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ─────────────────────────────────────────────────────────────────────────────
# ENDPOINT'LER
# ─────────────────────────────────────────────────────────────────────────────

@app.get("/", tags=["Genel"])
async def root():
    """Karşılama mesajı. API'nin çalıştığını doğrulamak için."""
    return {
        "message": "Türkçe Karakter Onarım API 🚀",
        "docs": "/docs",
        "health": "/health",
    }


@app.get("/health", response_model=HealthOutput, tags=["Genel"])
async def health_check(pipeline: RepairPipeline = Depends(get_pipeline)):
    """Servis sağlık kontrolü ve aktif onarım ayarları."""
    return HealthOutput(
        status="healthy",
        heuristics_enabled=pipeline.config.apply_heuristics,
        max_batch_size=pipeline.config.max_batch_size,
    )


@app.post("/repair/text", response_model=TextOutput, tags=["Onarım"])
async def repair_single_text(
    body: TextInput,
    pipeline: RepairPipeline = Depends(get_pipeline),
):
    """
    Tek bir metni onarır.

    **Örnek:** `"ÝSTANBUL"` → `"İSTANBUL"`
    """
    repaired = pipeline.repair_text(body.text)
    return TextOutput(
        original=body.text,
        repaired=repaired,
        changed=repaired != body.text,
    )


@app.post("/repair/records", response_model=RecordsOutput, tags=["Onarım"])
async def repair_records_endpoint(
    batch: RecordsInput,
    pipeline: RepairPipeline = Depends(get_pipeline),
):
    """
    Veritabanı satırlarını toplu onarır.

    Kayıt sayısı config'deki max_batch_size'ı aşarsa 400 döner.
    """
    try:
        result = pipeline.repair_batch(batch.records)
        return RecordsOutput(**result)

    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logging.error(f"Kayıt onarım hatası: {e}")
        raise HTTPException(status_code=500, detail=f"Onarım hatası: {str(e)}")


@app.post("/repair/structure", response_model=StructureOutput, tags=["Onarım"])
async def repair_structure_endpoint(
    body: StructureInput,
    pipeline: RepairPipeline = Depends(get_pipeline),
):
    """
    İç içe herhangi bir JSON yapısını onarır.

    Sözlük anahtarları ve liste sırası korunur, sadece metin değerler değişir.
    """
    try:
        return StructureOutput(**pipeline.repair(body.data))
    except Exception as e:
        logging.error(f"Yapı onarım hatası: {e}")
        raise HTTPException(status_code=500, detail=f"Onarım hatası: {str(e)}")


@app.post("/encode/sql", response_model=EncodeOutput, tags=["Kodlama"])
async def encode_for_sql(
    body: TextInput,
    pipeline: RepairPipeline = Depends(get_pipeline),
):
    """
    Metni veritabanına yazılacak cp1254 "binary string" formuna çevirir.

    **Örnek:** `"Şişli"` → `"Þiþli"`
    """
    return EncodeOutput(original=body.text, encoded=pipeline.encode_for_sql(body.text))
