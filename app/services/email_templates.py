"""Subject, text and HTML bodies for outgoing auth emails."""


def get_verify_email_template(url: str) -> dict[str, str]:
    return {
        "subject": "Verify Email Address",
        "text": f"Click on the link to verify your email address: {url}",
        "html": (
            "<p>Thanks for signing up. Please confirm your email address.</p>"
            f'<p><a href="{url}">Verify email address</a></p>'
            "<p>If you did not create an account, you can ignore this email.</p>"
        ),
    }


def get_password_reset_template(url: str) -> dict[str, str]:
    return {
        "subject": "Password Reset Request",
        "text": f"You requested a password reset. Click on the link to reset your password: {url}",
        "html": (
            "<p>We received a request to reset your password.</p>"
            f'<p><a href="{url}">Reset password</a></p>'
            "<p>This link expires in 1 hour. If you did not request a reset, you can ignore this email.</p>"
        ),
    }
