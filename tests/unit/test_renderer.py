"""Unit tests for the placeholder renderers."""

from __future__ import annotations

from issue_commenter.templating.renderer import (
    LiteralTokenRenderer,
    MustacheRenderer,
    contains_expressions,
)
from issue_commenter.templating.resolver import parse_variables


def test_mustache_substitutes_top_level_and_nested_keys() -> None:
    renderer = MustacheRenderer()

    output = renderer.render(
        "Hi {{login}} from {{repo.owner}}/{{repo.name}}",
        {"login": "octocat", "repo": {"owner": "octo-org", "name": "octo-repo"}},
    )

    assert output == "Hi octocat from octo-org/octo-repo"


def test_mustache_missing_key_renders_empty() -> None:
    assert MustacheRenderer().render("[{{missing}}] [{{a.b.c}}]", {}) == "[] []"


def test_mustache_renders_numbers_and_booleans() -> None:
    output = MustacheRenderer().render("{{count}} {{#done}}done{{/done}}", {"count": 3, "done": True})

    assert output == "3 done"


def test_mustache_interpolates_json_scalars_with_json_spelling() -> None:
    variables = parse_variables('{"done": true, "off": false, "score": 1.0, "ratio": 0.5}')

    output = MustacheRenderer().render(
        "[{{done}}] [{{off}}] [{{score}}] [{{ratio}}] [{{missing}}]", variables
    )

    assert output == "[true] [false] [1] [0.5] []"


def test_mustache_false_still_skips_sections() -> None:
    variables = parse_variables('{"off": false, "nested": {"on": true, "count": 2.0}}')

    output = MustacheRenderer().render(
        "{{#off}}shown{{/off}}{{^off}}inverted{{/off}} "
        "{{#nested.on}}on={{nested.on}}{{/nested.on}} {{nested.count}}",
        variables,
    )

    assert output == "inverted on=true 2"


def test_mustache_escapes_html_unless_triple_braced() -> None:
    output = MustacheRenderer().render("{{v}} {{{v}}}", {"v": "<b>"})

    assert output == "&lt;b&gt; <b>"


def test_expression_substitutes_known_keys_with_any_inner_whitespace() -> None:
    renderer = LiteralTokenRenderer({"github.repository": "octo-org/octo-repo"})

    output = renderer.render(
        "${{ github.repository }} ${{github.repository}} ${{   github.repository\t}}", {}
    )

    assert output == "octo-org/octo-repo octo-org/octo-repo octo-org/octo-repo"


def test_expression_leaves_unknown_keys_verbatim() -> None:
    renderer = LiteralTokenRenderer({"github.repository": "octo-org/octo-repo"})
    template = "token: ${{ secrets.GITHUB_TOKEN }} / ${{ github.sha }}"

    assert renderer.render(template, {}) == template


def test_expression_renderer_ignores_mustache_placeholders() -> None:
    renderer = LiteralTokenRenderer({"github.repository": "octo-org/octo-repo"})

    output = renderer.render("{{login}} in ${{ github.repository }}", {"login": "octocat"})

    assert output == "{{login}} in octo-org/octo-repo"


def test_expression_keys_may_contain_hyphens() -> None:
    renderer = LiteralTokenRenderer({"inputs.issue-number": "42"})

    assert renderer.render("#${{ inputs.issue-number }}", {}) == "#42"


def test_contains_expressions() -> None:
    assert contains_expressions("see ${{ github.repository }}")
    assert contains_expressions("use ${{ toJSON(github) }} or ${{ secrets }}")
    assert not contains_expressions("see {{repo}} and ${ not.an.expression }")
