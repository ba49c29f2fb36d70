from __future__ import annotations

from html import escape

from signup.domain.branding import Branding

_ACTIVATION_TEMPLATE = """<html>
<body>
<p>A request has been made to activate {product_phrase} for:</p>
<p>{email}</p>
<p>Click the link below to complete the activation. If you did not make this request, you can ignore this message.</p>
<p><a href="{link}">Activate your account</a></p>
<p>Thank you,<br />
    {signature}</p>
{footer}</body>
</html>
"""


def render_activation_message(branding: Branding, *, email: str, link: str) -> str:
    footer = ""
    if branding.allows_marketing:
        footer = f"<p>&copy; {escape(branding.company_name)}</p>\n"
    return _ACTIVATION_TEMPLATE.format(
        product_phrase=escape(branding.product_phrase),
        email=escape(email),
        link=escape(link, quote=True),
        signature=escape(branding.signature),
        footer=footer,
    )
