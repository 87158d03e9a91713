import os
from dotenv import load_dotenv

# .envから環境変数を読み込む
load_dotenv()

# Groq (OpenAI互換API)
GROQ_API_KEY = os.getenv("GROQ_API_KEY")
GROQ_API_URL = os.getenv("GROQ_API_URL", "https://api.groq.com/openai/v1")
GROQ_MODEL = os.getenv("GROQ_MODEL", "llama-3.3-70b-versatile")
GROQ_MAX_TOKENS = int(os.getenv("GROQ_MAX_TOKENS", "512"))
GROQ_DAILY_LIMIT = int(os.getenv("GROQ_DAILY_LIMIT", "20"))

# 利用回数の保存先
USAGE_DIR = os.getenv("USAGE_DIR", ".")
USAGE_KEY = os.getenv("USAGE_KEY", "groq_usage")

# LINE
LINE_CHANNEL_ACCESS_TOKEN = os.getenv("LINE_CHANNEL_ACCESS_TOKEN")
LINE_CHANNEL_SECRET = os.getenv("LINE_CHANNEL_SECRET")

PORT = int(os.getenv("PORT", "5000"))
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "10"))


def validate_api_keys():
    """Return a list of missing settings, empty when everything is set."""
    errors = []
    if not GROQ_API_KEY:
        errors.append("GROQ_API_KEY is not set. Please set it in your .env file.")
    if not LINE_CHANNEL_ACCESS_TOKEN or not LINE_CHANNEL_SECRET:
        errors.append("LINE_CHANNEL_ACCESS_TOKEN / LINE_CHANNEL_SECRET are not set.")
    return errors
