from .base import Notifier
from .formatter import TemplateRenderError, render_message
from .plivo_sms import PlivoNotifier
from .slack import SlackNotifier, WebhookError
from .twilio_sms import TwilioNotifier

__all__ = [
    "Notifier",
    "PlivoNotifier",
    "SlackNotifier",
    "TemplateRenderError",
    "TwilioNotifier",
    "WebhookError",
    "render_message",
]
