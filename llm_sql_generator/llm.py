"""
Dil modeli işlemleri için modül.
"""
import json
import logging
from typing import Any, Dict, List, Optional

import requests
from langchain_core.prompts import ChatPromptTemplate

from .config import (
    CONNECT_TIMEOUT,
    DEFAULT_API_URL,
    DEFAULT_MODEL_NAME,
    MODEL_CONFIG,
    REQUEST_TIMEOUT,
    SYSTEM_PROMPT_TEMPLATE,
    get_api_settings,
)
from .exceptions import LLMAPIError, ResponseFormatError, Txt2SqlError

logger = logging.getLogger(__name__)

# langchain mesaj tipi -> sohbet tamamlama rolü
_ROLES = {"system": "system", "human": "user"}


class LLMHandler:
    """Dil modeli işlemlerini yöneten sınıf."""

    def __init__(
        self,
        api_key: str,
        api_uri: str = DEFAULT_API_URL,
        model_name: str = DEFAULT_MODEL_NAME,
        session: Optional[requests.Session] = None,
    ):
        """İstemciyi başlat."""
        for name, value in (("API key", api_key), ("API URI", api_uri), ("modelName", model_name)):
            if value is None:
                raise ValueError(f"{name} cannot be None")

        self.api_key = api_key
        self.api_uri = api_uri
        self.model_name = model_name
        self.session = session or requests.Session()
        self.prompt = ChatPromptTemplate.from_messages([
            ("system", SYSTEM_PROMPT_TEMPLATE),
            ("human", "{question}"),
        ])

    @classmethod
    def from_config(cls, cfg: Dict[str, Any], session: Optional[requests.Session] = None) -> "LLMHandler":
        """``init_yml_cfg`` ile yüklenen yapılandırmadan istemci oluşturur."""
        settings = get_api_settings(cfg)
        return cls(
            api_key=settings.api_key,
            api_uri=settings.api_uri,
            model_name=settings.model_name,
            session=session,
        )

    def build_system_prompt(self, schema_text: str) -> str:
        """Şema bilgisini ve kuralları içeren sistem mesajını oluşturur."""
        return self.prompt.messages[0].format(schema=schema_text).content

    def build_messages(self, question: str, schema_text: str) -> List[Dict[str, str]]:
        messages = self.prompt.format_messages(schema=schema_text, question=question)
        return [{"role": _ROLES[m.type], "content": m.content} for m in messages]

    def build_request(self, question: str, schema_text: str) -> Dict[str, Any]:
        """İstek gövdesini oluşturur."""
        return {
            "model": self.model_name,
            "messages": self.build_messages(question, schema_text),
            "temperature": MODEL_CONFIG["temperature"],
            "max_tokens": MODEL_CONFIG["max_tokens"],
        }

    def send_request(self, payload: Dict[str, Any], check_status: bool = True) -> str:
        """İsteği servise gönderir ve yanıt gövdesini metin olarak döndürür.

        Args:
            payload: ``build_request`` ile oluşturulan gövde
            check_status: 200 dışındaki durum kodlarında ``LLMAPIError`` fırlat

        Returns:
            Ham JSON yanıtı
        """
        logger.info("start HTTP request to %s", self.api_uri)
        response = self.session.post(
            self.api_uri,
            json=payload,
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {self.api_key}",
            },
            timeout=(CONNECT_TIMEOUT, REQUEST_TIMEOUT),
        )
        logger.info("HTTP response status %s, body %s", response.status_code, response.text)

        if check_status and response.status_code != 200:
            raise LLMAPIError(response.status_code, response.text)

        return response.text

    @staticmethod
    def extract_content(response_json: str) -> str:
        """Yanıttan ``choices[0].message.content`` alanını çıkarır."""
        data = json.loads(response_json)

        choices = data.get("choices") if isinstance(data, dict) else None
        if not isinstance(choices, list) or not choices:
            raise ResponseFormatError("No choices in API response")

        message = choices[0].get("message") if isinstance(choices[0], dict) else None
        if not isinstance(message, dict) or not isinstance(message.get("content"), str):
            raise ResponseFormatError("No message content in API response")

        return message["content"]

    @staticmethod
    def clean_sql_output(text: str) -> str:
        """Model çıktısından SQL ifadesini temizler.

        Baştaki ```sql veya ``` ve sondaki ``` işaretleri kaldırılır.

        Args:
            text: Modelin ham çıktısı

        Returns:
            Temizlenmiş SQL ifadesi
        """
        sql = text.strip()
        if sql.startswith("```sql"):
            sql = sql[len("```sql"):]
        if sql.startswith("```"):
            sql = sql[len("```"):]
        if sql.endswith("```"):
            sql = sql[:-len("```")]
        return sql.strip()

    def generate_sql(self, question: str, schema_text: str) -> str:
        """Doğal dil sorusundan SQL sorgusu oluşturur.

        Args:
            question: Kullanıcının doğal dil sorusu
            schema_text: Veritabanı şema metni

        Returns:
            Oluşturulan SQL sorgusu
        """
        try:
            payload = self.build_request(question, schema_text)
            response_json = self.send_request(payload)
            return self.clean_sql_output(self.extract_content(response_json))
        except Exception as e:
            raise Txt2SqlError("Failed to convert text to SQL") from e

    def generate_raw(self, question: str, schema_text: str) -> str:
        """Soruyu gönderir ve servisin ham JSON yanıtını değiştirmeden döndürür."""
        try:
            payload = self.build_request(question, schema_text)
            return self.send_request(payload, check_status=False)
        except Exception as e:
            raise Txt2SqlError("Failed to convert text to SQL") from e
