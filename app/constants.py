import os

# Configurações globais de ambiente
TELEGRAM_TOKEN = os.getenv("TOKEN")
TELEGRAM_CHAT_ID = os.getenv("CHAT_ID")
TELEGRAM_API_BASE = "https://api.telegram.org"
TELEGRAM_PARSE_MODE = "Markdown"

# Endereço de escuta fixo
APP_HOST = "0.0.0.0"
APP_PORT = 8081
DEBUG_MODE = os.getenv("DEBUG_MODE", "False").lower() == "true"

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG").upper()
LOG_JSON = os.getenv("LOG_JSON", "false").lower() in ("1", "true", "yes")

# Corpo máximo (bytes) registrado pelo transporte de log
MAX_LOGGED_BODY = 4096

# Texto fixo da mensagem
MESSAGE_HEADER = "🚨 *Alerta SigNoz*"
DEFAULT_TITLE = "Sem título"
DEFAULT_DESCRIPTION = "Sem descrição"
DEFAULT_SEVERITY = "unknown"
RESOLVED_STATUS = "resolved"

# Caracteres reservados do Markdown do Telegram ('-' fica de fora)
MARKDOWN_SPECIAL_CHARS = "_*[]~`>#+=|{}.!"
