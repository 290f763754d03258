# easyguide/queue/mails.py
"""Payload builders for jobs on the mail queue: ``{mailType, options, data}``."""


class MailTypes:
    OTP_CODE = "OtpCode"
    RESTORE_PASSWORD = "RestorePassword"
    TICKETS = "Tickets"
    SUPPORT_TICKET = "SupportTicket"
    SUPPORT_REPLY = "SupportReply"
    TEMPORARY_PASSWORD = "TemporaryPassword"
    CHANGE_EMAIL_NOTIFICATION = "ChangeEmailNotification"
    CHANGE_EMAIL_ALERT = "ChangeEmailAlert"

    ALL = (
        OTP_CODE,
        RESTORE_PASSWORD,
        TICKETS,
        SUPPORT_TICKET,
        SUPPORT_REPLY,
        TEMPORARY_PASSWORD,
        CHANGE_EMAIL_NOTIFICATION,
        CHANGE_EMAIL_ALERT,
    )


def _job(mail_type, data, to=None, subject=None):
    options = {}
    if to:
        options["to"] = to
    if subject:
        options["subject"] = subject
    return {"mailType": mail_type, "options": options, "data": data}


def send_otp(otp, user):
    return _job(MailTypes.OTP_CODE, {"otpCode": otp, "user": user.get("firstName")}, to=user.get("email"))


def send_restore_password(link, user):
    return _job(MailTypes.RESTORE_PASSWORD, {"link": link, "user": user.get("firstName")}, to=user.get("email"))


def send_admin_restore_password(link, admin):
    return _job(MailTypes.RESTORE_PASSWORD, {"link": link, "user": admin.get("name")}, to=admin.get("email"))


def send_tickets(tickets, user):
    return _job(MailTypes.TICKETS, {"tickets": tickets, "user": user.get("firstName")}, to=user.get("email"))


def send_support_ticket(ticket):
    data = {
        "user": ticket.get("name"),
        "email": ticket.get("email"),
        "phoneNumber": ticket.get("phoneNumber"),
        "subject": ticket.get("subject"),
        "message": ticket.get("message"),
    }
    return _job(MailTypes.SUPPORT_TICKET, data, subject=ticket.get("subject"))


def send_support_reply(ticket):
    data = {"user": ticket.get("name"), "subject": ticket.get("subject"), "message": ticket.get("message")}
    return _job(MailTypes.SUPPORT_REPLY, data, to=ticket.get("email"))


def send_temporary_password(data):
    payload = {"user": data.get("name"), "temporaryPassword": data.get("temporaryPassword")}
    return _job(MailTypes.TEMPORARY_PASSWORD, payload, to=data.get("email"))


def send_change_email_notification(data):
    return _job(MailTypes.CHANGE_EMAIL_NOTIFICATION, {"user": data.get("firstName")}, to=data.get("email"))


def send_change_email_alert(data):
    payload = {"link": data.get("link"), "user": data.get("firstName")}
    return _job(MailTypes.CHANGE_EMAIL_ALERT, payload, to=data.get("email"))
