"""
Hata sınıfları.
"""


class SQLGeneratorError(Exception):
    """Paketteki tüm hataların temel sınıfı."""


class ConfigError(SQLGeneratorError):
    """Yapılandırma dosyası var fakat gerekli alanları içermiyor."""


class LLMAPIError(SQLGeneratorError):
    """Servis 200 dışında bir durum kodu döndürdü."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"API request failed with status: {status_code}, body: {body}")


class ResponseFormatError(SQLGeneratorError):
    """Yanıt JSON'u beklenen sohbet tamamlama yapısında değil."""


class Txt2SqlError(SQLGeneratorError):
    """Soru SQL'e dönüştürülemedi. Asıl hata ``__cause__`` içindedir."""
