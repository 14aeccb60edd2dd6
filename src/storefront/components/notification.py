"""
Notification banner
"""
from typing import Dict, Optional

from src.integrations.contracts.storefront import Notification, NotificationKind

_STYLES = {
    NotificationKind.SUCCESS: "green",
    NotificationKind.ERROR: "red",
    NotificationKind.INFO: "indigo",
}


def notification_banner(notification: Optional[Notification], dismissible: bool = True) -> Optional[Dict]:
    """None when there is nothing to show"""
    if notification is None or not notification.text:
        return None
    kind = NotificationKind(notification.kind)
    banner = {
        'type': 'notification',
        'kind': kind.value,
        'title': kind.value.capitalize(),
        'message': notification.text,
        'color': _STYLES[kind],
    }
    if dismissible:
        banner['actions'] = [{'type': 'dismiss', 'label': '×'}]
    return banner


def inline_error(text: str) -> Dict:
    """Page-level notice, not tied to the store's live notification"""
    return notification_banner(Notification(text=text, kind=NotificationKind.ERROR), dismissible=False)
