"""Unit tests for markdown segment helpers."""

from workrobot.domain import markdown as md


class TestTitle:
    def test_levels(self):
        assert md.title(md.MAXIMAL_TITLE, "a") == "# a"
        assert md.title(md.MEDIUM_TITLE, "a") == "### a"
        assert md.title(md.MINIMUM_TITLE, "a") == "###### a"

    def test_clamped(self):
        assert md.title(0, "a") == "# a"
        assert md.title(-3, "a") == "# a"
        assert md.title(9, "a") == "###### a"


class TestInline:
    def test_link(self):
        assert md.link("view", "http://dashboard.example.com") == "[view](http://dashboard.example.com)"

    def test_bold_any(self):
        assert md.bold(42) == "**42**"

    def test_code(self):
        assert md.code("ls -la") == "`ls -la`"

    def test_quote_multiline(self):
        assert md.quote("Ip: 10.2.3.4\nAction: Restart") == "> Ip: 10.2.3.4\n> Action: Restart"

    def test_colors(self):
        assert md.color_green("ok") == '<font color="info">ok</font>'
        assert md.color_gray("meh") == '<font color="comment">meh</font>'
        assert md.color_red("bad") == '<font color="warning">bad</font>'

    def test_segments_are_strings(self):
        seg = md.bold("x")
        assert isinstance(seg, md.Segment)
        assert isinstance(seg, str)


class TestJoin:
    def test_mixed(self):
        assert md.join(" ", md.bold("a"), "b", 3) == "**a** b 3"

    def test_empty(self):
        assert md.join(",") == ""
