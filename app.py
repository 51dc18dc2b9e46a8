#!/usr/bin/env python3
"""
Elementary cellular automaton renderer - WSGI Application

Every GET request is answered from its query string:
1. image=yes: the PNG of the automaton (Content-Disposition inline, rule<N>.png)
2. anything else: an HTML page embedding that image plus a parameter form

Query parameters: rule, cells, steps, seed, initial, start_type, image.
Missing or malformed parameters take their configured defaults; cells and
steps are clamped to the configured bounds.

Error handling:
- Invalid automaton input (e.g. rule outside 0..255): 400 with a JSON body
  for image requests; page requests show the error above the form
- Methods other than GET/HEAD: 405
- Anything unexpected: 500, traceback on stderr
"""
from __future__ import annotations

import json
import sys
import traceback
from typing import Callable, Optional, Tuple
from urllib.parse import parse_qs

from config import Settings, load_settings
from params import RequestParams, parse_request
from page import render_page
from render import AutomatonRenderer, RenderedImage, log_entry, make_renderer, render_for_params
from render_logger import log_render
from rules import InvalidArgument

Response = Tuple[str, list, bytes]


def send_error(message: str, code: int = 400) -> Response:
    """Build a JSON error response.

    Args:
        message: Error message
        code: HTTP status code

    Returns:
        Tuple of (status, headers, body)
    """
    data = {'status': 'error', 'message': message, 'code': code}
    body = json.dumps(data).encode('utf-8')
    status = f'{code} Error'
    headers = [
        ('Content-Type', 'application/json; charset=utf-8'),
        ('Content-Length', str(len(body)))
    ]
    return (status, headers, body)


def send_image(image: RenderedImage) -> Response:
    headers = [
        ('Content-Type', image.content_type),
        ('Content-Disposition', f'inline; filename="{image.filename}"'),
        ('Content-Length', str(len(image.data)))
    ]
    return ('200 OK', headers, image.data)


def send_html(text: str) -> Response:
    body = text.encode('utf-8')
    headers = [
        ('Content-Type', 'text/html; charset=utf-8'),
        ('Content-Length', str(len(body)))
    ]
    return ('200 OK', headers, body)


def handle_image(params: RequestParams, renderer: AutomatonRenderer, settings: Settings) -> Response:
    image = render_for_params(renderer, params)
    log_render(log_entry(params, image, 'web'), log_file=settings.log_file)
    return send_image(image)


def handle_page(params: RequestParams, script_name: str) -> Response:
    src = f'{script_name or "/"}?{params.query_string()}'
    return send_html(render_page(params, src))


def make_app(settings: Optional[Settings] = None) -> Callable:
    """Build the WSGI callable around one set of settings."""
    if settings is None:
        settings = load_settings()
    renderer = make_renderer(settings)

    def application(environ, start_response):
        """WSGI application entry point."""
        try:
            method = environ.get('REQUEST_METHOD', 'GET')
            path = environ.get('PATH_INFO', '/')
            query_string = environ.get('QUERY_STRING', '')
            print(f"DEBUG: {method} {path}{'?' + query_string if query_string else ''}", file=sys.stderr)

            if method not in ('GET', 'HEAD'):
                status, headers, body = send_error('Method not allowed', 405)
                start_response(status, headers)
                return [body]

            params = parse_request(parse_qs(query_string), settings)
            try:
                if params.image:
                    status, headers, body = handle_image(params, renderer, settings)
                else:
                    status, headers, body = handle_page(params, environ.get('SCRIPT_NAME', '') + path)
            except InvalidArgument as e:
                status, headers, body = send_error(str(e), 400)

            start_response(status, headers)
            return [b''] if method == 'HEAD' else [body]

        except Exception as e:
            print(f"ERROR: Unhandled exception: {e}", file=sys.stderr)
            traceback.print_exc(file=sys.stderr)

            status, headers, body = send_error(f'Internal server error: {str(e)}', 500)
            start_response(status, headers)
            return [body]

    return application


application = make_app()
