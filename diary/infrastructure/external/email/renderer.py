"""Email bodies (HTML and plain text) rendered with Jinja."""

from __future__ import annotations

from jinja2 import Environment, Template

from diary.shared.utils.datetime import utc_now

_HTML_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<style>
  body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; }
  .container { max-width: 600px; margin: 0 auto; padding: 20px; }
  .header { background-color: #4a6fa5; color: #fff; padding: 20px; text-align: center; }
  .content { padding: 20px; background-color: #f9f9f9; }
  .message { background-color: #fff; border-left: 4px solid #4a6fa5; padding: 15px; margin: 15px 0; white-space: pre-line; }
  .button { display: inline-block; background-color: #4a6fa5; color: #fff; padding: 10px 20px; text-decoration: none; border-radius: 4px; }
  .footer { font-size: 12px; color: #777; text-align: center; padding: 20px; }
</style>
</head>
<body>
<div class="container">
  <div class="header">
    <h1>Second Diary</h1>
    <p>{{ header }}</p>
  </div>
  <div class="content">
    <p>Hello,</p>
    {% if intro %}<p>{{ intro }}</p>{% endif %}
    <div class="message">{{ message }}</div>
    {% if outro %}<p>{{ outro }}</p>{% endif %}
    <p><a href="{{ app_url }}" class="button">Visit Second Diary</a></p>
  </div>
  <div class="footer">
    <p>If you'd like to update your email preferences, please visit your account settings.</p>
    <p>&copy; {{ year }} Second Diary. All rights reserved.</p>
  </div>
</div>
</body>
</html>
"""

_TEXT_TEMPLATE = """SECOND DIARY - {{ header | upper }}

Hello,
{% if intro %}
{{ intro }}
{% endif %}
{{ message }}
{% if outro %}
{{ outro }}
{% endif %}
Visit Second Diary: {{ app_url }}

If you'd like to update your email preferences, please visit your account settings.

(c) {{ year }} Second Diary. All rights reserved.
"""


class EmailContentRenderer:
    """Renders (html, text) bodies; user-supplied text is escaped in HTML only."""

    def __init__(self, app_url: str) -> None:
        self._app_url = app_url
        self._html: Template = Environment(autoescape=True).from_string(_HTML_TEMPLATE)
        self._text: Template = Environment(autoescape=False).from_string(_TEXT_TEMPLATE)

    def render(self, header: str, intro: str, message: str, outro: str) -> tuple[str, str]:
        ctx = {
            "header": header,
            "intro": intro,
            "message": message,
            "outro": outro,
            "app_url": self._app_url,
            "year": utc_now().year,
        }
        return self._html.render(**ctx), self._text.render(**ctx)
