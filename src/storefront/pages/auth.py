"""
Auth page - Register and mock login forms.
"""

from typing import Any, Dict

from src.storefront.validation import raise_if_errors, require_str, validate_email
from src.integrations.contracts.storefront import NotificationKind
from src.integrations.errors import ValidationRejection


class AuthPage:
    def __init__(self, store):
        self.store = store

    async def on_mount(self):
        return None

    async def submit_register(self, form: Dict[str, Any]) -> bool:
        errors: Dict[str, str] = {}
        username = require_str(form, "username", errors, label="Username")
        email = validate_email(form.get("email", ""), errors, field="email")
        password = require_str(form, "password", errors, label="Password")
        try:
            raise_if_errors(errors)
        except ValidationRejection as exc:
            self.store.notify(exc.message, NotificationKind.ERROR)
            return False

        await self.store.register(username, email, password)
        return True

    async def submit_login(self, form: Dict[str, Any]) -> bool:
        errors: Dict[str, str] = {}
        username = require_str(form, "username", errors, label="Username")
        password = require_str(form, "password", errors, label="Password")
        try:
            raise_if_errors(errors)
        except ValidationRejection as exc:
            self.store.notify(exc.message, NotificationKind.ERROR)
            return False

        await self.store.login(username, password)
        return True

    def render(self) -> Dict:
        loading = self.store.loading
        return {
            "type": "auth",
            "title": "Access Account",
            "forms": [
                {
                    "name": "register",
                    "title": "Register",
                    "fields": [
                        {"name": "username", "label": "Username", "type": "text", "required": True},
                        {"name": "email", "label": "Email", "type": "email", "required": True},
                        {"name": "password", "label": "Password", "type": "password", "required": True},
                    ],
                    "submit": {"label": "Processing..." if loading else "Sign Up", "disabled": loading},
                },
                {
                    "name": "login",
                    "title": "Login",
                    "fields": [
                        {"name": "username", "label": "Username", "type": "text", "required": True},
                        {"name": "password", "label": "Password", "type": "password", "required": True},
                    ],
                    "submit": {"label": "Logging In..." if loading else "Log In", "disabled": loading},
                },
            ],
        }
