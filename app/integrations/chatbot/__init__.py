# Chatbot integration module
from app.integrations.chatbot.client import ChatbotClient

__all__ = ["ChatbotClient"]
