from src.chat.lead_trigger import should_offer_lead
from src.chat.session import ChatReply, ChatSession, LeadPanelOutcome

__all__ = ["ChatSession", "ChatReply", "LeadPanelOutcome", "should_offer_lead"]
