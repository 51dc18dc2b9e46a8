from __future__ import annotations
from html import escape
from typing import List

from generate import StartType
from params import RequestParams
from rules import ElementaryRule, InvalidArgument

NKS_URL = "http://www.wolframscience.com/nksonline/toc.html"

START_TYPE_LABELS = {
    StartType.RANDOM: "Random / initial values",
    StartType.LEFT: "Single cell on the left",
    StartType.MIDDLE: "Single cell in the middle",
    StartType.RIGHT: "Single cell on the right",
}


def rule_description_html(rule: int | ElementaryRule) -> str:
    '''
    "Rule 110 maps 000 to 0, 001 to 1, ..., and 111 to 0."
    '''
    rule = ElementaryRule.coerce(rule)
    parts: List[str] = []
    for code, (neighborhood, value) in enumerate(rule.transitions()):
        prefix = "and " if code == 7 else ""
        parts.append(f"{prefix}{neighborhood}&nbsp;to&nbsp;{value}")
    return f"Rule {rule.number} maps " + ", ".join(parts) + "."


def _start_type_options(selected: StartType) -> str:
    options = []
    for start_type, label in START_TYPE_LABELS.items():
        mark = " selected" if start_type is selected else ""
        options.append(f'<option value="{start_type.value}"{mark}>{escape(label)}</option>')
    return "\n".join(options)


def _figure_html(rule: ElementaryRule, params: RequestParams, image_src: str) -> str:
    height = params.steps + 1 # the initial row is drawn too
    return f"""<img
  src="{escape(image_src)}"
  width="{params.cells}"
  height="{height}"
  alt="Image of rule {rule.number}"
>
<br>
{rule_description_html(rule)}"""


def render_page(params: RequestParams, image_src: str) -> str:
    """
    Full HTML page for `params`. `image_src` is whatever the <img> should
    load: the image endpoint URL, or a data: URI for standalone pages.

    A rule outside 0..255 still gets the page and its form, with an error
    message in place of the image.
    """
    try:
        figure = _figure_html(ElementaryRule.coerce(params.rule), params, image_src)
    except InvalidArgument as e:
        figure = f'<p style="color:red">Invalid parameters: {escape(str(e))}</p>'
    return f"""<!DOCTYPE html>
<html>
<head><title>Rule {params.rule}</title></head>
<body>
<div style="width:450px">
<h1>Rule {params.rule}</h1>
{figure}
<h2>Change the parameters</h2>
<form method="get">
Rule: <input type="text" value="{params.rule}" name="rule">
<br>
Number of cells: <input type="text" value="{params.cells}" name="cells">
<br>
Number of steps: <input type="text" value="{params.steps}" name="steps">
<br>
Start with: <select name="start_type">
{_start_type_options(params.start_type)}
</select>
<br>
Random seed: <input type="text" value="{params.seed}" name="seed">
<br>
Initial cell values: <input type="text" value="{escape(params.initial)}" name="initial" size="35">
&nbsp;&nbsp;<input type="submit">
</form>
<hr>
<p>If no initial value is provided, the cells are set to random values. If an initial value isn't provided for every cell, the provided sequence of values is repeated until every cell is provided for, going from left to right. Initial values only apply when starting with random / initial values.
</p>
<p>
If a non-zero seed is provided, it will be used to seed the pseudo-random number generator. It's useful to specify a seed here if you wish the results to be easily reproducible.
</p>
<p>
The first row of the image is the initial state; each following row is one step of the rule.
</p>
<p>
More information on cellular automata and their applications can be found in Stephen Wolfram's
<a href="{NKS_URL}">A New Kind of Science</a>.
</p>
</div>
</body>
</html>
"""
