def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


class RecordingEmailSender:
    """Stands in for the SMTP sender and keeps every message it was asked to send."""

    def __init__(self):
        self.sent = []
        self.fail = False

    async def send(self, recipient, subject, body, subtype="html"):
        if self.fail:
            raise RuntimeError("SMTP server unavailable")
        self.sent.append({"recipient": recipient, "subject": subject, "body": body})
