# easyguide/notification/consumer.py
import logging

logger = logging.getLogger(__name__)


class MailQueueConsumer:
    """Bind the ``send_email`` job of the mail queue to the Mailer."""

    def __init__(self, config, mailer, celery_app, flask_app):
        queue_name = config.get("QUEUE_NAME_MAIL")
        if not queue_name:
            raise ValueError("No name was provided for queue.")
        self.queue_name = queue_name
        self.job_name = config.get("QUEUE_JOB_NAME_SEND_EMAIL", "send_email")
        self.mailer = mailer
        self.celery_app = celery_app
        self.flask_app = flask_app

    def run_jobs(self):
        mailer, flask_app = self.mailer, self.flask_app

        def send_email(job):
            with flask_app.app_context():
                try:
                    msg = mailer.send_mail(job)
                except Exception as e:
                    logger.error("Queue job error: %s", e)
                    raise
            logger.info("[MAIL] %s sent to %s", job.get("mailType"), msg.recipients[0])
            return job.get("mailType")

        routes = dict(self.celery_app.conf.task_routes or {})
        routes[self.job_name] = {"queue": self.queue_name}
        self.celery_app.conf.task_routes = routes
        return self.celery_app.task(name=self.job_name, shared=False)(send_email)
