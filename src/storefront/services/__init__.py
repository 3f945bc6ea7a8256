from .assistant import AssistantSettings, ChatAssistant
from .catalog import CatalogService
from .mailer import ContactMailer

__all__ = ["AssistantSettings", "CatalogService", "ChatAssistant", "ContactMailer"]
