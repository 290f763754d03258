# easyguide/notification/mailer.py
import logging
import os
from datetime import datetime

from flask import render_template
from flask_mail import Message

from easyguide.extensions import mail
from easyguide.queue.mails import MailTypes

logger = logging.getLogger(__name__)

ASSETS_DIR = os.path.join(os.path.dirname(__file__), "static")
LOGO_FILE = "logo.png"


def welcome_subject(data: dict) -> str:
    return f"Hi {data.get('user')}, Welcome to easyGuide"


MAIL_TEMPLATES = {
    MailTypes.OTP_CODE: ("otp.html", welcome_subject),
    MailTypes.RESTORE_PASSWORD: ("restore-password.html", "Restore password - easyGuide"),
    MailTypes.TICKETS: ("tickets.html", "Tickets - easyGuide"),
    MailTypes.SUPPORT_TICKET: ("support-ticket.html", "New support ticket - easyGuide"),
    MailTypes.SUPPORT_REPLY: ("support-reply.html", "Support reply - easyGuide"),
    MailTypes.TEMPORARY_PASSWORD: ("temporary-password.html", welcome_subject),
    MailTypes.CHANGE_EMAIL_NOTIFICATION: ("change-email-notification.html", welcome_subject),
    MailTypes.CHANGE_EMAIL_ALERT: ("change-email-alert.html", "Alert - easyGuide"),
}


class Mailer:
    """
    Render a mail job ``{mailType, options, data}`` into HTML and send it
    through Flask-Mail. Must run inside an app context.
    """

    def __init__(self, config):
        self.config = config

    @property
    def sender(self):
        name = self.config.get("MAIL_FROM_NAME", "easyGuide")
        address = self.config.get("MAIL_FROM_ADDRESS") or self.config.get("MAIL_USERNAME")
        return (name, address)

    def get_template(self, mail_type: str, data: dict):
        if mail_type not in MAIL_TEMPLATES:
            raise ValueError(f"Unknown mail type: {mail_type}")
        template, subject = MAIL_TEMPLATES[mail_type]
        return template, subject(data) if callable(subject) else subject

    def recipient(self, mail_type: str, options: dict):
        if mail_type == MailTypes.SUPPORT_TICKET:
            return self.config.get("SUPPORT_EMAIL_CONTACT_US")
        return options.get("to")

    def build_message(self, job: dict) -> Message:
        mail_type = job.get("mailType")
        options = job.get("options") or {}
        data = job.get("data") or {}

        template, subject = self.get_template(mail_type, data)
        if mail_type == MailTypes.SUPPORT_TICKET and options.get("subject"):
            subject = options["subject"]
        to = self.recipient(mail_type, options)
        if not to:
            raise ValueError(f"No recipient for mail type: {mail_type}")

        html = render_template(f"mail/{template}", **data, appDomain=self.config.get("API_DOMAIN"))
        msg = Message(subject=subject, recipients=[to], html=html, sender=self.sender)
        msg.charset = "utf-8"
        with open(os.path.join(ASSETS_DIR, LOGO_FILE), "rb") as fh:
            msg.attach(
                filename=LOGO_FILE,
                content_type="image/png",
                data=fh.read(),
                disposition="inline",
                headers={"Content-ID": "<logo>"},
            )
        return msg

    def send_mail(self, job: dict) -> Message:
        msg = self.build_message(job)
        mail.send(msg)
        logger.debug("Email message to %s is sent at %s", msg.recipients[0], datetime.utcnow().isoformat())
        return msg
