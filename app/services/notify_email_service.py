import logging
from functools import lru_cache
from typing import List

from fastapi_mail import FastMail, MessageSchema, ConnectionConfig, MessageType
from pydantic import SecretStr

from app.core.config import settings
from app.core.errors import InternalError

logger = logging.getLogger(__name__)


class EmailSender:
    """fastapi-mail 기반 메일 발송기 (라우터에는 get_email_sender 로 주입)"""

    def __init__(self, conf: ConnectionConfig):
        self.conf = conf

    async def send(self, recipient: str, subject: str, body: str, subtype: str = "html") -> None:
        message = MessageSchema(
            subject=subject,
            recipients=[recipient],
            body=body,
            subtype=MessageType(subtype),
        )
        await self.send_message(message)

    async def send_message(self, message: MessageSchema) -> None:
        fm = FastMail(self.conf)
        await fm.send_message(message)


def build_connection_config() -> ConnectionConfig:
    return ConnectionConfig(
        MAIL_USERNAME=settings.MAIL_USERNAME,
        MAIL_PASSWORD=SecretStr(settings.MAIL_PASSWORD),
        MAIL_FROM=settings.MAIL_FROM,
        MAIL_PORT=settings.MAIL_PORT,
        MAIL_SERVER=settings.MAIL_SERVER,
        MAIL_STARTTLS=settings.MAIL_STARTTLS,
        MAIL_SSL_TLS=settings.MAIL_SSL_TLS,
        USE_CREDENTIALS=bool(settings.MAIL_USERNAME),
        SUPPRESS_SEND=int(settings.MAIL_SUPPRESS_SEND),
    )


@lru_cache
def get_email_sender() -> EmailSender:
    return EmailSender(build_connection_config())


async def send_email(sender: EmailSender, recipients: List[str], subject: str, body: str) -> None:
    """
    공통 이메일 전송 함수. 발송 실패는 InternalError 로 그대로 전달합니다.
    """
    for recipient in recipients:
        try:
            await sender.send(recipient, subject, body)
        except Exception as e:
            logger.exception("Failed to send email to %s", recipient)
            raise InternalError(f"Failed to send email: {e}") from e


# 회원가입 인증 코드(OTP) 메일 전송 함수
async def send_verification_code(sender: EmailSender, email: str, name: str, code: str) -> None:
    subject = "[Meeting Scheduler] Verify your email"
    body = f"""
    Hello {name},<br><br>
    Your verification code is <b>{code}</b>.<br><br>
    Enter this code to activate your account before logging in.<br><br>
    If you did not register, simply ignore this message.
    """
    await send_email(sender, [email], subject, body)
