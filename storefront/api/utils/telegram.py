import json
import urllib.error
import urllib.request

from flask import current_app

from storefront.errors import NotificationError


def send_telegram_message(text: str) -> bool:
    """
    Post text to the configured Telegram chat.

    Returns False without calling out when TELEGRAM_BOT_TOKEN or
    TELEGRAM_CHAT_ID is missing. Transport errors and non-ok answers from
    the Bot API are logged and raised as NotificationError.
    """
    cfg = current_app.config
    token = cfg.get("TELEGRAM_BOT_TOKEN")
    chat_id = cfg.get("TELEGRAM_CHAT_ID")
    if not token or not chat_id:
        current_app.logger.warning("Telegram bot token/chat id not configured, skipping notification")
        return False

    api_base = (cfg.get("TELEGRAM_API_BASE") or "https://api.telegram.org").rstrip("/")
    api_url = f"{api_base}/bot{token}/sendMessage"
    payload = {
        "chat_id": chat_id,
        "text": text,
        "parse_mode": "HTML",
        "disable_web_page_preview": True,
    }
    req = urllib.request.Request(
        api_url,
        data=json.dumps(payload).encode("utf-8"),
        headers={"Content-Type": "application/json"},
        method="POST",
    )
    try:
        with urllib.request.urlopen(req, timeout=cfg.get("TELEGRAM_TIMEOUT", 8)) as resp:
            body = resp.read()
    except urllib.error.HTTPError as exc:
        current_app.logger.error("Telegram API error: HTTP %s %s", exc.code, exc.reason)
        raise NotificationError(f"Telegram API error: HTTP {exc.code}") from exc
    except (urllib.error.URLError, OSError) as exc:
        current_app.logger.error("Telegram API unreachable: %s", exc)
        raise NotificationError("Telegram API unreachable") from exc

    try:
        obj = json.loads(body.decode("utf-8"))
    except ValueError as exc:
        current_app.logger.error("Telegram API returned invalid JSON")
        raise NotificationError("Telegram API returned invalid JSON") from exc

    if not obj.get("ok"):
        current_app.logger.error("Telegram API refused message: %s", obj.get("description"))
        raise NotificationError(f"Telegram API error: {obj.get('description')}")
    return True
