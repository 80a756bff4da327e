"""Mock Votify sign-up page for local test runs.

Reproduces the parts of https://auth.votify.app/cs/sign-up the UI suite
talks to: the registration form, its client-side validation (length on
blur, email format and confirmation on submit) and the redirect to
/cs/successful-sign-up?email=... after a valid registration.

Usage:
    # Start mock server
    votify-mock-signup

    # Point the suite at it (conftest starts its own instance)
    UI_TARGET=mock pytest ui_tests/tests -v
"""
from __future__ import annotations

import threading
from typing import Dict, List, Set

from flask import Flask, abort, jsonify, render_template_string, request, url_for

from ui_tests.email_oracle import is_email
from ui_tests.workflows import MESSAGES, MIN_PASSWORD_LENGTH, SignUpMessages


FORM_FIELDS = ("email", "password", "confirm_password")

_REGISTERED_EMAILS: Set[str] = set()
_LOCK = threading.Lock()

EMAIL_TAKEN = {
    "cs": "E-mail je již zaregistrován",
}


SIGN_UP_TEMPLATE = """<!doctype html>
<html lang="{{ locale }}">
<head>
  <meta charset="utf-8">
  <title>Votify</title>
  <style>
    body { font-family: sans-serif; max-width: 28rem; margin: 3rem auto; }
    .field { display: flex; flex-direction: column; margin-bottom: 1rem; }
    .error { color: #b00020; margin: 0.25rem 0 0; }
  </style>
</head>
<body>
  <form id="sign-up-form" novalidate>
    <div class="field">
      <label for="email">{{ messages.email_label }}</label>
      <input id="email" name="email" type="text" inputmode="email" placeholder="{{ messages.email_placeholder }}" autocomplete="email">
      <div id="email-feedback" aria-live="polite"></div>
    </div>
    <div class="field">
      <label for="password">{{ messages.password_label }}</label>
      <input id="password" name="password" type="password" autocomplete="new-password">
      <div id="password-feedback" aria-live="polite"></div>
    </div>
    <div class="field">
      <label for="confirm_password">{{ messages.confirm_password_label }}</label>
      <input id="confirm_password" name="confirm_password" type="password" autocomplete="new-password">
      <div id="confirm_password-feedback" aria-live="polite"></div>
    </div>
    <button type="submit">{{ messages.submit_button }}</button>
  </form>
  <script>
    const MIN_LENGTH = {{ min_length|tojson }};
    const TOO_SHORT = {{ messages.password_too_short|tojson }};
    const API_URL = {{ api_url|tojson }};
    const FIELDS = ["email", "password", "confirm_password"];
    const form = document.getElementById("sign-up-form");
    const password = document.getElementById("password");

    // Feedback nodes only exist while they are shown
    function show(field, text) {
      const box = document.getElementById(field + "-feedback");
      box.replaceChildren();
      if (text) {
        const node = document.createElement("p");
        node.className = "error";
        node.textContent = text;
        box.appendChild(node);
      }
    }

    password.addEventListener("blur", () => {
      show("password", password.value.length < MIN_LENGTH ? TOO_SHORT : null);
    });

    form.addEventListener("submit", async (event) => {
      event.preventDefault();
      FIELDS.forEach((field) => show(field, null));
      const payload = {};
      FIELDS.forEach((field) => { payload[field] = form.elements[field].value; });
      const response = await fetch(API_URL, {
        method: "POST",
        headers: {"Content-Type": "application/json"},
        body: JSON.stringify(payload),
      });
      const body = await response.json();
      if (body.redirect) {
        window.location.assign(body.redirect);
        return;
      }
      (body.errors || []).forEach((error) => show(error.field, error.message));
    });
  </script>
</body>
</html>
"""

SUCCESS_TEMPLATE = """<!doctype html>
<html lang="{{ locale }}">
<head><meta charset="utf-8"><title>Votify</title></head>
<body>
  <h1>Registrace proběhla úspěšně</h1>
  <p>Potvrzovací odkaz jsme poslali na <strong>{{ email }}</strong>.</p>
</body>
</html>
"""


def _messages_or_404(locale: str) -> SignUpMessages:
    messages = MESSAGES.get(locale)
    if messages is None:
        abort(404)
    return messages


def validate_sign_up(payload: Dict[str, str], locale: str) -> List[Dict[str, str]]:
    """Return the field errors the sign-up form would display for ``payload``."""
    messages = MESSAGES[locale]
    email = payload.get("email") or ""
    password = payload.get("password") or ""
    confirm_password = payload.get("confirm_password") or ""

    errors: List[Dict[str, str]] = []
    if not is_email(email):
        errors.append({"field": "email", "message": messages.invalid_email})
    else:
        with _LOCK:
            taken = email.lower() in _REGISTERED_EMAILS
        if taken:
            errors.append({"field": "email", "message": EMAIL_TAKEN[locale]})
    if len(password) < MIN_PASSWORD_LENGTH:
        errors.append({"field": "password", "message": messages.password_too_short})
    if password != confirm_password:
        errors.append({"field": "confirm_password", "message": messages.password_mismatch})
    return errors


def create_mock_signup_app() -> Flask:
    """Create the Flask app serving the replica sign-up flow."""
    app = Flask(__name__)

    @app.route('/<locale>/sign-up', methods=['GET'])
    def sign_up(locale: str):
        messages = _messages_or_404(locale)
        return render_template_string(
            SIGN_UP_TEMPLATE,
            locale=locale,
            messages=messages,
            min_length=MIN_PASSWORD_LENGTH,
            api_url=url_for('sign_up_api', locale=locale),
        )

    @app.route('/<locale>/api/sign-up', methods=['POST'])
    def sign_up_api(locale: str):
        _messages_or_404(locale)
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return jsonify({"errors": [{"field": "form", "message": "Invalid JSON body"}]}), 400
        for field in FORM_FIELDS:
            if field in payload and not isinstance(payload[field], str):
                return jsonify({"errors": [{"field": field, "message": "Must be a string"}]}), 400

        errors = validate_sign_up(payload, locale)
        if errors:
            return jsonify({"errors": errors}), 422

        email = payload["email"]
        with _LOCK:
            _REGISTERED_EMAILS.add(email.lower())
        return jsonify({"redirect": url_for('successful_sign_up', locale=locale, email=email)}), 200

    @app.route('/<locale>/successful-sign-up', methods=['GET'])
    def successful_sign_up(locale: str):
        _messages_or_404(locale)
        return render_template_string(SUCCESS_TEMPLATE, locale=locale, email=request.args.get('email', ''))

    @app.route('/health', methods=['GET'])
    def health():
        """Health check endpoint."""
        return jsonify({"status": "ok", "service": "mock-signup"}), 200

    return app


def registered_emails() -> Set[str]:
    with _LOCK:
        return set(_REGISTERED_EMAILS)


def reset_mock_state() -> None:
    """Forget every registration."""
    with _LOCK:
        _REGISTERED_EMAILS.clear()


# Create app instance for gunicorn (e.g., gunicorn ui_tests.mock_signup_app:app)
app = create_mock_signup_app()


def main() -> None:
    print("Mock Votify sign-up server running on http://localhost:5557")
    print("Endpoints:")
    print("  GET  /cs/sign-up               - Registration form")
    print("  POST /cs/api/sign-up           - Form submission (JSON)")
    print("  GET  /cs/successful-sign-up    - Confirmation page")
    print("  GET  /health                   - Health check")
    app.run(host='0.0.0.0', port=5557, debug=True)


if __name__ == '__main__':
    main()
