# Uygulama genelinde loglama ayarı
import logging
import os
from datetime import datetime

# Log dosyasının adı: "text_repair_08_25_2023_14_30_05.log" formatında
LOG_FILE = f"text_repair_{datetime.now().strftime('%m_%d_%Y_%H_%M_%S')}.log"

# Logların yazılacağı klasör: (proje_dizini/logs)
LOG_DIR = os.path.join(os.getcwd(), "logs")
os.makedirs(LOG_DIR, exist_ok=True)

LOG_FILE_PATH = os.path.join(LOG_DIR, LOG_FILE)

# LOG_LEVEL=DEBUG verilirse 1. adımdaki (byte yorumlama) başarısızlıklar da görünür
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

logging.basicConfig(
    filename=LOG_FILE_PATH,
    format="[ %(asctime)s ] %(lineno)d %(name)s - %(levelname)s - %(message)s",
    level=getattr(logging, LOG_LEVEL, logging.INFO),
)
