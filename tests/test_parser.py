from catalogue.parser import materialize, parse


def test_parse_quoted_comma():
    rows = parse('Title,Summary\n"Road, Bridge",Fixes roads')
    assert rows == [["Title", "Summary"], ["Road, Bridge", "Fixes roads"]]


def test_parse_crlf_is_one_terminator():
    assert parse("A,B\r\n1,2\r\n") == [["A", "B"], ["1", "2"]]


def test_parse_lone_cr_ends_row():
    assert parse("A,B\r1,2") == [["A", "B"], ["1", "2"]]


def test_parse_escaped_quotes_and_embedded_newline():
    text = 'Title,Summary\n"He said ""hi""","line one\nline two"\n'
    rows = parse(text)
    assert rows[1] == ['He said "hi"', "line one\nline two"]
    assert len(rows) == 2


def test_parse_empty_input():
    assert parse("") == []


def test_parse_ragged_rows_pass_through():
    rows = parse("A,B,C\n1\n1,2,3,4\n")
    assert rows == [["A", "B", "C"], ["1"], ["1", "2", "3", "4"]]


def test_parse_blank_line_is_single_empty_field():
    assert parse("A\n\n1\n") == [["A"], [""], ["1"]]


def test_materialize_zips_trims_and_drops_blank_rows():
    rows = parse(" Title , Summary \n  Road ,  Fix  \n , \n\nBridge\n")
    records = materialize(rows)
    assert records == [
        {"Title": "Road", "Summary": "Fix"},
        {"Title": "Bridge", "Summary": ""},
    ]


def test_materialize_ignores_extra_fields():
    records = materialize([["A", "B"], ["1", "2", "3"]])
    assert records == [{"A": "1", "B": "2"}]


def test_materialize_duplicate_headers_keep_last_value():
    records = materialize([["Title", "Title"], ["first", "second"]])
    assert records == [{"Title": "second"}]


def test_materialize_reports_tolerated_rows():
    issues = []
    materialize([["A", "B"], ["1"], ["", " "], ["1", "2", "3"]], issues)
    assert [(i["row"], i["issue"], i["action"]) for i in issues] == [
        (2, "row_too_short", "padded_to_2"),
        (3, "blank_row", "dropped"),
        (4, "row_too_long", "truncated_to_2"),
    ]


def test_materialize_empty():
    assert materialize([]) == []
    assert materialize([["Title"]]) == []


def test_round_trip_of_quoted_values():
    values = ['a, b', 'multi\r\nline', 'say ""x""', '  padded  ']
    line = ",".join(f'"{v}"' for v in values)
    records = materialize(parse("W,X,Y,Z\r\n" + line + "\r\n"))
    assert records == [{"W": "a, b", "X": "multi\r\nline", "Y": 'say "x"', "Z": "padded"}]
