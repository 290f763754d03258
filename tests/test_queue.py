from unittest.mock import MagicMock

import pytest

from easyguide.queue import JobQueue, QueueRegistry, make_celery
from easyguide.queue import mails
from easyguide.queue.mails import MailTypes


@pytest.fixture
def celery_app():
    app = MagicMock()
    app.send_task.return_value = "async-result"
    return app


class TestQueueRegistry:
    def test_register_and_get(self, celery_app):
        registry = QueueRegistry(celery_app)
        queue = registry.register_queue("mail", check_connection=False)

        assert isinstance(queue, JobQueue)
        assert registry.get_queue("mail") is queue
        assert registry.names() == ["mail"]

    def test_empty_name_is_rejected(self, celery_app):
        with pytest.raises(ValueError, match="No name was provided"):
            QueueRegistry(celery_app).register_queue("", check_connection=False)

    def test_duplicate_name_is_rejected(self, celery_app):
        registry = QueueRegistry(celery_app)
        registry.register_queue("mail", check_connection=False)
        with pytest.raises(ValueError, match="already exists"):
            registry.register_queue("mail", check_connection=False)

    def test_unknown_queue(self, celery_app):
        with pytest.raises(KeyError, match="No queue was found"):
            QueueRegistry(celery_app).get_queue("sms")

    def test_failed_ping_still_registers(self, celery_app):
        celery_app.connection_for_write.side_effect = ConnectionError("refused")
        registry = QueueRegistry(celery_app)
        registry.register_queue("mail")
        assert registry.names() == ["mail"]

    def test_close_all(self, celery_app):
        registry = QueueRegistry(celery_app)
        registry.register_queue("mail", check_connection=False)
        registry.close_all()
        celery_app.pool.force_close_all.assert_called_once()
        assert registry.names() == []


class TestJobQueue:
    def test_add_routes_to_named_queue(self, celery_app):
        queue = JobQueue("mail", celery_app)
        job = mails.send_otp("123456", {"firstName": "Ann", "email": "ann@example.com"})

        assert queue.add("send_email", job) == "async-result"
        celery_app.send_task.assert_called_once_with("send_email", args=[job], queue="mail")


class TestMailPayloads:
    def test_otp(self):
        job = mails.send_otp("123456", {"firstName": "Ann", "email": "ann@example.com"})
        assert job == {
            "mailType": MailTypes.OTP_CODE,
            "options": {"to": "ann@example.com"},
            "data": {"otpCode": "123456", "user": "Ann"},
        }

    def test_support_ticket_has_no_recipient(self):
        job = mails.send_support_ticket({
            "name": "Ann",
            "email": "ann@example.com",
            "subject": "Refund",
            "message": "Please help",
        })
        assert job["options"] == {"subject": "Refund"}
        assert job["data"]["email"] == "ann@example.com"

    def test_support_reply_goes_to_the_sender(self):
        job = mails.send_support_reply({"name": "Ann", "email": "ann@example.com", "subject": "Refund"})
        assert job["mailType"] == MailTypes.SUPPORT_REPLY
        assert job["options"] == {"to": "ann@example.com"}

    def test_temporary_password(self):
        job = mails.send_temporary_password({"name": "Ann", "email": "a@b.c", "temporaryPassword": "Xy12"})
        assert job["data"] == {"user": "Ann", "temporaryPassword": "Xy12"}

    def test_every_builder_uses_a_known_type(self):
        jobs = [
            mails.send_restore_password("https://x", {"firstName": "A", "email": "a@b.c"}),
            mails.send_admin_restore_password("https://x", {"name": "A", "email": "a@b.c"}),
            mails.send_tickets({"items": []}, {"firstName": "A", "email": "a@b.c"}),
            mails.send_change_email_notification({"firstName": "A", "email": "a@b.c"}),
            mails.send_change_email_alert({"firstName": "A", "email": "a@b.c", "link": "https://x"}),
        ]
        assert all(job["mailType"] in MailTypes.ALL for job in jobs)


def test_make_celery_reads_broker_settings():
    app = make_celery("test", {"CELERY_BROKER_URL": "memory://", "CELERY_RESULT_BACKEND": "cache+memory://"})
    assert app.conf.broker_url == "memory://"
    assert app.conf.timezone == "UTC"
    assert app.conf.task_always_eager is False
