"""Report delivery.

``dispatch`` posts a rendered report to the email endpoint. The endpoint
itself (``routes/email_routes.py``) relays it over SMTP with
``send_smtp_email``.
"""
import base64
import logging
import smtplib
from email.mime.application import MIMEApplication
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

import requests
from flask import current_app

from rugqc.exceptions import DeliveryError

logger = logging.getLogger(__name__)


def dispatch(recipients, subject, html, pdf_base64, pdf_filename, session=None):
    """Send a report to ``recipients``. Returns False when there is no one to send to."""
    recipients = [r for r in (recipients or []) if r]
    if not recipients:
        logger.info(f'No report recipients configured, skipping delivery of "{subject}"')
        return False

    url = current_app.config.get('EMAIL_ENDPOINT_URL')
    payload = {
        'to': recipients,
        'subject': subject,
        'html': html,
        'pdfBase64': pdf_base64,
        'pdfFilename': pdf_filename,
    }
    headers = {
        'Authorization': f"Bearer {current_app.config.get('API_SECRET_TOKEN')}",
        'X-User-Id': 'report-dispatcher',
        'X-User-Name': 'Report Dispatcher',
    }
    http = session or requests
    try:
        resp = http.post(url, json=payload, headers=headers,
                         timeout=current_app.config.get('EMAIL_TIMEOUT', 60))
    except requests.RequestException as e:
        logger.error(f'Email endpoint unreachable ({url}): {e}')
        raise DeliveryError(f'Email endpoint unreachable: {e}') from e

    if not resp.ok:
        message = _error_message(resp)
        logger.error(f'Email endpoint returned {resp.status_code}: {message}')
        raise DeliveryError(message)

    logger.info(f'Report "{subject}" sent to {len(recipients)} recipient(s)')
    return True


def _error_message(resp):
    try:
        body = resp.json()
    except ValueError:
        return resp.text or f'HTTP {resp.status_code}'
    if not isinstance(body, dict):
        return resp.text or f'HTTP {resp.status_code}'
    return body.get('error') or body.get('message') or f'HTTP {resp.status_code}'


def build_message(sender, to, subject, html, pdf_base64=None, pdf_filename=None):
    msg = MIMEMultipart('mixed')
    msg['Subject'] = subject
    msg['From'] = sender
    msg['To'] = ', '.join(to)
    msg.attach(MIMEText(html, 'html', 'utf-8'))
    if pdf_base64:
        attachment = MIMEApplication(base64.b64decode(pdf_base64), _subtype='pdf')
        attachment.add_header('Content-Disposition', 'attachment', filename=pdf_filename or 'report.pdf')
        msg.attach(attachment)
    return msg


def send_smtp_email(to, subject, html, pdf_base64=None, pdf_filename=None):
    """Send one message through the configured SMTP relay."""
    config = current_app.config
    to = to if isinstance(to, list) else [to]
    sender = config.get('MAIL_FROM')
    msg = build_message(sender, to, subject, html, pdf_base64, pdf_filename)

    with smtplib.SMTP(config.get('SMTP_HOST'), config.get('SMTP_PORT', 587), timeout=30) as server:
        server.starttls()
        if config.get('SMTP_USER'):
            server.login(config.get('SMTP_USER'), config.get('SMTP_PASSWORD'))
        server.sendmail(sender, to, msg.as_string())
    logger.info(f'SMTP message "{subject}" sent to {", ".join(to)}')
