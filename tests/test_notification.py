import pytest

from easyguide.container import get_container
from easyguide.extensions import mail, mail_host
from easyguide.notification.app import create_app as create_notification_app
from easyguide.queue import mails
from easyguide.queue.mails import MailTypes
from tests.conftest import BASE

USER = {"firstName": "Ann", "email": "ann@example.com"}


@pytest.fixture
def container(notification_app):
    return get_container(notification_app)


@pytest.fixture
def send_email(container):
    return container.get("celery").tasks["send_email"]


class TestMailer:
    def test_otp_message(self, notification_app, container):
        with notification_app.app_context():
            msg = container.get("mailer").build_message(mails.send_otp("123456", USER))

        assert msg.subject == "Hi Ann, Welcome to easyGuide"
        assert msg.recipients == ["ann@example.com"]
        assert "123456" in msg.html
        assert "cid:logo" in msg.html
        assert msg.attachments[0].filename == "logo.png"

    def test_otp_message_renders_with_inline_logo(self, notification_app, container):
        with notification_app.app_context():
            msg = container.get("mailer").build_message(mails.send_otp("123456", USER))
            raw = msg.as_string()

        assert "From: easyGuide <no-reply@easyguide.test>" in raw
        assert "To: ann@example.com" in raw
        assert "Content-ID: <logo>" in raw
        assert 'filename="logo.png"' in raw

    def test_support_ticket_goes_to_support(self, notification_app, container):
        job = mails.send_support_ticket({"name": "Ann", "email": "ann@example.com", "subject": "Refund",
                                         "message": "Please help"})
        with notification_app.app_context():
            msg = container.get("mailer").build_message(job)

        assert msg.recipients == ["support@easyguide.test"]
        assert msg.subject == "Refund"
        assert "ann@example.com" in msg.html

    def test_tickets_message(self, notification_app, container):
        tickets = {
            "items": [{
                "name": "Tower of London",
                "date": "2030-01-01",
                "time": "10:00",
                "ticketsCount": 2,
                "productOptions": [{"name": "Adult", "orderedQty": 2}],
            }],
            "order": {"orderUuid": "TSI-TKT-1", "subTotal": 20, "gatewayCharges": 0.78, "grandTotal": 20.78},
        }
        with notification_app.app_context():
            msg = container.get("mailer").build_message(mails.send_tickets(tickets, USER))

        assert msg.subject == "Tickets - easyGuide"
        assert "Tower of London" in msg.html
        assert "TSI-TKT-1" in msg.html
        assert "20.78" in msg.html

    def test_unknown_mail_type(self, notification_app, container):
        with notification_app.app_context(), pytest.raises(ValueError, match="Unknown mail type"):
            container.get("mailer").build_message({"mailType": "Sms", "options": {"to": "a@b.c"}, "data": {}})

    def test_missing_recipient(self, notification_app, container):
        with notification_app.app_context(), pytest.raises(ValueError, match="No recipient"):
            container.get("mailer").build_message({"mailType": MailTypes.OTP_CODE, "options": {}, "data": {}})


class TestMailQueueConsumer:
    def test_job_is_routed_to_mail_queue(self, notification_app, container):
        routes = container.get("celery").conf.task_routes
        assert routes["send_email"] == {"queue": notification_app.config["QUEUE_NAME_MAIL"]}

    def test_send_email_job(self, notification_app, send_email):
        with mail.record_messages() as outbox:
            result = send_email(mails.send_restore_password("https://easyguide.test/reset?token=t", USER))

        assert result == MailTypes.RESTORE_PASSWORD
        assert len(outbox) == 1
        assert outbox[0].subject == "Restore password - easyGuide"
        assert "https://easyguide.test/reset?token=t" in outbox[0].html

    def test_failed_job_raises(self, send_email):
        with pytest.raises(ValueError):
            send_email({"mailType": "Unknown", "options": {"to": "a@b.c"}, "data": {}})


def test_health(notification_app):
    body = notification_app.test_client().get("/health").get_json()["resultData"]
    assert body["service"] == "notification"
    assert body["queues"] == [notification_app.config["QUEUE_NAME_MAIL"]]


class TestMailSettings:
    def test_mail_host_strips_scheme_port_and_path(self):
        assert mail_host(" smtps://SMTP.example.com:465/ ") == "smtp.example.com"
        assert mail_host("smtp.example.com") == "smtp.example.com"
        assert mail_host(None) == ""

    def test_ssl_wins_over_tls_and_port_falls_back(self):
        app = create_notification_app({
            **BASE,
            "MAIL_SUPPRESS_SEND": True,
            "MAIL_SERVER": "smtps://smtp.example.com:465",
            "MAIL_USE_SSL": "true",
            "MAIL_USE_TLS": True,
            "MAIL_PORT": "not-a-port",
            "MAIL_FROM_ADDRESS": "no-reply@easyguide.test",
        })

        assert app.config["MAIL_SERVER"] == "smtp.example.com"
        assert app.config["MAIL_USE_SSL"] is True
        assert app.config["MAIL_USE_TLS"] is False
        assert app.config["MAIL_PORT"] == 465
