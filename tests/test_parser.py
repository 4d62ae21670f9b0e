"""
Tests for the jtml parser module.
"""

import pytest
from jtml.parser import (
    NODE_START,
    Attribute,
    Comment,
    Document,
    Element,
    Parser,
    Text,
    Token,
    TokenIsNotEnough,
    TokenType,
    UnexpectedToken,
    lex,
    parse_document,
    parse_file,
    parse_source,
)


def parser_for(source, **kwargs):
    return Parser(lex(source), **kwargs)


class TestExpect:
    """Test the one-token matcher."""

    def test_match_consumes(self):
        parser = parser_for("(")
        parser.expect(TokenType.LEFT_PAREN)
        assert parser.tokens.is_empty()

    def test_mismatch(self):
        parser = parser_for("( )")
        with pytest.raises(UnexpectedToken) as exc:
            parser.expect(TokenType.RIGHT_PAREN)
        assert exc.value == UnexpectedToken(TokenType.RIGHT_PAREN, Token(TokenType.LEFT_PAREN))
        # Snapshot is for diagnostics only
        assert exc.value.remaining == (Token(TokenType.RIGHT_PAREN),)

    def test_empty_queue(self):
        with pytest.raises(TokenIsNotEnough) as exc:
            parser_for("").expect(TokenType.EQUAL)
        assert exc.value == TokenIsNotEnough(TokenType.EQUAL)


class TestAttributes:
    """Test the probe-ahead attribute list."""

    def test_single_attribute(self):
        assert parser_for('id="text"').parse_attributes() == (Attribute("id", "text"),)

    def test_multiple_attributes(self):
        parser = parser_for('id="text" id2="text2"')
        assert parser.parse_attributes() == (Attribute("id", "text"), Attribute("id2", "text2"))
        assert parser.tokens.is_empty()

    def test_empty(self):
        assert parser_for("").parse_attributes() == ()

    def test_duplicates_and_order_preserved(self):
        attrs = parser_for('b="1" a="2" b="3"').parse_attributes()
        assert [(a.key, a.value) for a in attrs] == [("b", "1"), ("a", "2"), ("b", "3")]

    def test_partial_match_consumes_nothing(self):
        """A failed probe leaves its tokens in the queue."""
        parser = parser_for('id="x" key= )')
        assert parser.parse_attributes() == (Attribute("id", "x"),)
        assert list(parser.tokens) == [
            Token(TokenType.IDENTIFIER, "key"),
            Token(TokenType.EQUAL),
            Token(TokenType.RIGHT_PAREN),
        ]

    def test_value_must_be_string(self):
        parser = parser_for('width=100')
        assert parser.parse_attributes() == ()
        assert len(parser.tokens) == 3


class TestNode:
    """Test single node parsing."""

    def test_text(self):
        assert parser_for('"hello"').parse_node() == Text("hello")

    def test_comment(self):
        assert parser_for("// note").parse_node() == Comment("note")

    def test_element(self):
        assert parser_for("p(){}").parse_node() == Element("p")

    def test_element_with_attribute(self):
        node = parser_for('p(width="100"){}').parse_node()
        assert node == Element("p", (Attribute("width", "100"),))
        assert node.get_attribute("width") == "100"

    def test_element_with_contents(self):
        node = parser_for('p(){"hello""world"}').parse_node()
        assert node.children == (Text("hello"), Text("world"))

    def test_node_with_child_nodes(self):
        parser = parser_for('p(){p(){"test"}p(){"test1""test2"}}}')
        node = parser.parse_node()
        assert node == Element("p", children=(
            Element("p", children=(Text("test"),)),
            Element("p", children=(Text("test1"), Text("test2"))),
        ))
        # Trailing brace is left for the caller
        assert list(parser.tokens) == [Token(TokenType.RIGHT_BRACKET)]

    def test_self_terminating_without_body(self):
        parser = parser_for('img(src="a.png")')
        assert parser.parse_node() == Element("img", (Attribute("src", "a.png"),))
        assert parser.tokens.is_empty()

    def test_self_terminating_leaves_braces(self):
        parser = parser_for("br(){}")
        assert parser.parse_node() == Element("br")
        assert [t.type for t in parser.tokens] == [TokenType.LEFT_BRACKET, TokenType.RIGHT_BRACKET]

    def test_custom_self_terminating_tags(self):
        parser = parser_for("icon()", self_terminating_tags={"icon"})
        assert parser.parse_node() == Element("icon")
        with pytest.raises(TokenIsNotEnough):
            parser_for("img()", self_terminating_tags={"icon"}).parse_node()

    def test_missing_right_bracket(self):
        with pytest.raises(TokenIsNotEnough) as exc:
            parser_for("p(){").parse_node()
        assert exc.value == TokenIsNotEnough(TokenType.RIGHT_BRACKET)

    def test_missing_left_bracket(self):
        with pytest.raises(TokenIsNotEnough) as exc:
            parser_for("p()").parse_node()
        assert exc.value == TokenIsNotEnough(TokenType.LEFT_BRACKET)

    def test_missing_right_paren(self):
        with pytest.raises(TokenIsNotEnough) as exc:
            parser_for("p(").parse_node()
        assert exc.value == TokenIsNotEnough(TokenType.RIGHT_PAREN)

    def test_wrong_left_paren(self):
        with pytest.raises(UnexpectedToken) as exc:
            parser_for("p)").parse_node()
        assert exc.value == UnexpectedToken(TokenType.LEFT_PAREN, Token(TokenType.RIGHT_PAREN))

    def test_unexpected_start(self):
        parser = parser_for("}")
        with pytest.raises(UnexpectedToken) as exc:
            parser.parse_node()
        assert exc.value.expected == NODE_START
        # Peeking does not consume
        assert len(parser.tokens) == 1

    def test_empty_queue(self):
        with pytest.raises(TokenIsNotEnough) as exc:
            parser_for("").parse_node()
        assert exc.value.expected == NODE_START


class TestNodes:
    """Test the node-sequence parser."""

    def test_normal(self):
        nodes, error = parser_for("p(){\n\n}\np(){\n\n}").parse_nodes()
        assert nodes == (Element("p"), Element("p"))
        assert error == TokenIsNotEnough(*NODE_START)

    def test_complicated(self):
        source = '''
        "stringliteral"
        p(a="b"){
            "child"
        }
        // comment
        p(){

        }
        '''
        nodes, _ = parser_for(source).parse_nodes()
        assert nodes == (
            Text("stringliteral"),
            Element("p", (Attribute("a", "b"),), (Text("child"),)),
            Comment("comment"),
            Element("p"),
        )

    def test_stops_at_unclosed_element(self):
        source = '''
        p(a="b"){
            "child"
        }
        // comment
        p(){
        '''
        nodes, error = parser_for(source).parse_nodes()
        assert len(nodes) == 2
        assert error == TokenIsNotEnough(TokenType.RIGHT_BRACKET)

    def test_stops_at_wrong_token(self):
        nodes, error = parser_for('p(a="b"){"child"}\n// comment\np(){(').parse_nodes()
        assert len(nodes) == 2
        assert error == UnexpectedToken(TokenType.RIGHT_BRACKET, Token(TokenType.LEFT_PAREN))

    def test_failed_attempt_keeps_consumed_tokens(self):
        parser = parser_for('"a" p) "b"')
        nodes, error = parser.parse_nodes()
        assert nodes == (Text("a"),)
        assert isinstance(error, UnexpectedToken)
        # 'p' and ')' were consumed by the failed element
        assert list(parser.tokens) == [Token(TokenType.STRING_LITERAL, "b")]


class TestDocument:
    """Test whole-document parsing."""

    def test_document(self):
        doc = parse_source("h1(){}p(){}")
        assert doc == Document((Element("h1"), Element("p")))

    def test_empty_document(self):
        assert parse_source("") == Document()
        assert parse_source("  \n ") == Document()

    def test_comment_only(self):
        assert parse_source("// hi") == Document((Comment("hi"),))

    def test_truncated_element_is_an_error(self):
        """The failure empties the queue but is still reported."""
        with pytest.raises(TokenIsNotEnough) as exc:
            parse_document(lex("p("))
        assert exc.value == TokenIsNotEnough(TokenType.RIGHT_PAREN)

    def test_unclosed_body(self):
        with pytest.raises(TokenIsNotEnough) as exc:
            parse_source('p(){"x"')
        assert exc.value == TokenIsNotEnough(TokenType.RIGHT_BRACKET)

    def test_leftover_tokens(self):
        with pytest.raises(UnexpectedToken) as exc:
            parse_source('p(){} }')
        assert exc.value == UnexpectedToken(NODE_START, Token(TokenType.RIGHT_BRACKET))

    def test_self_terminating_with_body_not_consumed(self):
        for tag in ("br", "hr", "img", "input", "meta", "area", "base", "col",
                    "embed", "keygen", "link", "param", "source"):
            with pytest.raises(UnexpectedToken) as exc:
                parse_source(f"{tag}(){{}}")
            assert exc.value.actual == Token(TokenType.LEFT_BRACKET)

    def test_page(self, page_ast):
        html = page_ast.nodes[0]
        assert html.tag_name == "html"
        head, body = html.children
        assert [c.tag_name for c in head.children] == ["meta", "meta", "title"]
        assert head.children[1].attributes == (
            Attribute("http-equiv", "X-UA-Compatible"),
            Attribute("content", "IE=edge"),
        )
        assert body.children[0] == Comment("page body")

    def test_get_elements(self):
        doc = parse_source('"x" p(){} div(){} p(){}')
        assert len(doc.get_elements()) == 3
        assert len(doc.get_elements("p")) == 2

    def test_parse_file(self, write_jtml):
        path = write_jtml("a.jtml", 'p(){"file"}')
        assert parse_file(path) == Document((Element("p", children=(Text("file"),)),))


class TestErrorMessages:
    """Test error equality and display."""

    def test_unexpected_token_message(self):
        error = UnexpectedToken(TokenType.RIGHT_PAREN, Token(TokenType.LEFT_BRACKET))
        assert str(error) == "Unexpected token: expected RIGHT_PAREN, got LeftBracket '{'"

    def test_not_enough_message(self):
        assert str(TokenIsNotEnough(TokenType.EQUAL)) == "Token is not enough: expected EQUAL"

    def test_equality_ignores_snapshot(self):
        a = UnexpectedToken(TokenType.EQUAL, Token(TokenType.LEFT_PAREN), (Token(TokenType.EQUAL),))
        b = UnexpectedToken(TokenType.EQUAL, Token(TokenType.LEFT_PAREN))
        assert a == b
        assert a != TokenIsNotEnough(TokenType.EQUAL)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
