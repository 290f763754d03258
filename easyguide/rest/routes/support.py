# easyguide/rest/routes/support.py
from flask import Blueprint

from easyguide.errors import success
from easyguide.queue import mails
from easyguide.rest.routes.utils import enqueue_mail, get_payload
from easyguide.validation import Validator, throw_validation_error

support_bp = Blueprint("support", __name__, url_prefix="/support")


@support_bp.post("/send-ticket")
def send_ticket():
    ticket = get_payload()
    throw_validation_error([
        *Validator(ticket.get("name"), "name").required().result(),
        *Validator(ticket.get("email"), "email").required().email().result(),
        *Validator(ticket.get("subject"), "subject").required().result(),
        *Validator(ticket.get("message"), "message").required().result(),
    ])
    enqueue_mail(mails.send_support_ticket(ticket))
    enqueue_mail(mails.send_support_reply(ticket))
    return success()
