# portfolio/contact/views.py
from html import escape
import sib_api_v3_sdk
from flask import current_app
from sib_api_v3_sdk.rest import ApiException
from portfolio.logging_config import setup_logging


logger = setup_logging()


def send_contact_notification(contact_message):
    """Email the site owner about a new contact message.

    Does nothing unless both ``BREVO_API_KEY`` and ``NOTIFY_EMAIL`` are
    configured. Failures are logged and never reach the caller.
    """
    api_key = current_app.config.get('BREVO_API_KEY')
    notify_email = current_app.config.get('NOTIFY_EMAIL')
    if not api_key or not notify_email:
        return False

    try:
        # Initialize Brevo API client
        configuration = sib_api_v3_sdk.Configuration()
        configuration.api_key['api-key'] = api_key
        api_client = sib_api_v3_sdk.ApiClient(configuration)
        api_instance = sib_api_v3_sdk.TransactionalEmailsApi(api_client)

        send_smtp_email = sib_api_v3_sdk.SendSmtpEmail(
            to=[{"email": notify_email}],
            sender={"name": "Portfolio", "email": notify_email},
            reply_to={"email": contact_message.email, "name": contact_message.name},
            subject=f"New message from {contact_message.name}",
            html_content=(
                f"You have received a new message through the contact form.<br><br>"
                f"<strong>{escape(contact_message.name)}</strong> &lt;{escape(contact_message.email)}&gt;"
                f"<p>{escape(contact_message.message)}</p>"
            )
        )

        try:
            api_response = api_instance.send_transac_email(send_smtp_email)
            logger.info(f"Contact notification sent successfully: {api_response}")
            return True
        except ApiException as e:
            logger.error(f"Exception when calling TransactionalEmailsApi->send_transac_email: {e}")

    except Exception as e:
        logger.error(f"Failed to send contact notification: {str(e)}")
    return False
