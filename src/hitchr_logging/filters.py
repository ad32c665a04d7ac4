"""Log filters that scrub contact details and fill context placeholders."""

import logging
import re

CONTEXT_DEFAULTS = {"correlation_id": "-", "listing_id": "-"}


class PIIFilter(logging.Filter):
    """Masks emails, phone numbers and precise coordinates before output.

    Guest feeds only ever see jittered positions; a raw ``lat, lng`` pair in
    a log line would undo that, so pairs with four or more decimals are
    masked along with contact details. Both the message and string args
    are scrubbed.
    """

    EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+")
    PHONE_PATTERN = re.compile(r"\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}")
    COORDS_PATTERN = re.compile(r"-?\d{1,3}\.\d{4,}\s*,\s*-?\d{1,3}\.\d{4,}")

    @classmethod
    def scrub(cls, text: str) -> str:
        if "@" in text:
            text = cls.EMAIL_PATTERN.sub("[EMAIL]", text)
        if any(c.isdigit() for c in text):
            text = cls.COORDS_PATTERN.sub("[COORDS]", text)
            text = cls.PHONE_PATTERN.sub("[PHONE]", text)
        return text

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = self.scrub(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(self.scrub(a) if isinstance(a, str) else a for a in record.args)
        return True


class ContextDefaultsFilter(logging.Filter):
    """Gives every record the context fields the formatters reference."""

    def filter(self, record: logging.LogRecord) -> bool:
        for field, placeholder in CONTEXT_DEFAULTS.items():
            if not hasattr(record, field):
                setattr(record, field, placeholder)
        return True
