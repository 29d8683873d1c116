# ============================================================================
# exception.py — Proje Genelinde Kullanılan Özel Hata Sınıfı
# ============================================================================
# Altyapı kodunda (config okuma, JSON yükleme, pipeline kurulumu) yakalanan
# her hata CustomException ile sarılır. Mesaj, hatanın oluştuğu dosya adını
# ve satır numarasını içerir → log'dan kaynağa hızlı ulaşılır.
#
# NOT: Metin onarım fonksiyonları (text_repair.py) bu sınıfı KULLANMAZ.
#      Onarım asla hata fırlatmaz, en kötü ihtimalle metni olduğu gibi döner.
#
# KULLANIM:
#   try:
#       ...
#   except Exception as e:
#       raise CustomException(e, sys)
# ============================================================================

import sys

from src.logger import logging


def error_message_detail(error, error_detail) -> str:
    """
    Hatanın oluştuğu dosya ve satır bilgisini içeren mesajı üretir.

    Args:
        error: Yakalanan orijinal hata
        error_detail: sys modülü (exc_info() çağrısı için)

    Returns:
        str: "Hata [dosya.py] satır [42]: mesaj" formatında açıklama
    """
    _, _, exc_tb = error_detail.exc_info()

    # except bloğu dışında çağrılırsa traceback olmaz
    if exc_tb is None:
        return f"Hata: {error}"

    # En içteki frame → hatanın gerçekten oluştuğu yer
    while exc_tb.tb_next is not None:
        exc_tb = exc_tb.tb_next

    file_name = exc_tb.tb_frame.f_code.co_filename
    return (
        f"Hata [{file_name}] satır [{exc_tb.tb_lineno}]: {error}"
    )


class CustomException(Exception):
    """Dosya/satır bilgisiyle zenginleştirilmiş proje hatası."""

    def __init__(self, error_message, error_detail=sys):
        super().__init__(error_message)
        self.original_error = error_message
        self.error_message = error_message_detail(error_message, error_detail)
        logging.error(self.error_message)

    def __str__(self) -> str:
        return self.error_message
