"""
Notifications Module - Telegram notifications to the portfolio owner
"""

import threading
import requests
from flask import current_app
from markupsafe import escape


TELEGRAM_API_URL = 'https://api.telegram.org/bot{token}/sendMessage'


def get_admin_notifications_config():
    """Load owner notification settings from the app config"""
    return {
        'bot_token': current_app.config.get('ADMIN_TELEGRAM_BOT_TOKEN') or '',
        'chat_id': current_app.config.get('ADMIN_TELEGRAM_CHAT_ID') or ''
    }


def _post_telegram(app, url, payload):
    try:
        response = requests.post(url, json=payload, timeout=10)
        if response.status_code == 200:
            app.logger.info("Owner Telegram notification sent")
        else:
            app.logger.error(f"Telegram API error: {response.status_code}")
    except requests.RequestException as e:
        app.logger.error(f"Owner Telegram Error: {str(e)}")


def format_notification(subject, fields):
    """
    Build an HTML Telegram message; every user-supplied value is escaped

    Args:
        subject (str): Notification title
        fields (dict): label -> value pairs
    """
    lines = [f"🔔 <b>{escape(subject)}</b>", '']
    for label, value in fields.items():
        if value in (None, ''):
            continue
        text = str(value)
        if len(text) > 200:
            text = text[:200] + '...'
        lines.append(f"<b>{escape(label)}:</b> {escape(text)}")
    return '\n'.join(lines)


def send_admin_notification(subject, fields):
    """
    Notify the owner via Telegram without blocking the request

    Returns:
        bool: True when a notification was dispatched
    """
    config = get_admin_notifications_config()
    if not (config['bot_token'] and config['chat_id']):
        current_app.logger.debug("Admin Telegram credentials not configured")
        return False

    url = TELEGRAM_API_URL.format(token=config['bot_token'])
    payload = {
        'chat_id': config['chat_id'],
        'text': format_notification(subject, fields),
        'parse_mode': 'HTML'
    }
    app = current_app._get_current_object()
    thread = threading.Thread(target=_post_telegram, args=(app, url, payload))
    thread.daemon = True
    thread.start()
    return True


__all__ = [
    'get_admin_notifications_config',
    'format_notification',
    'send_admin_notification'
]
