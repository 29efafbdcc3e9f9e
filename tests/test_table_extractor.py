"""Tests for table extraction and table lookups."""

from hwp_spec_server.indexer import (
    Table,
    extract_sections,
    extract_tables,
    find_table_by_name_or_id,
    find_table_candidates,
    format_table,
)


def _table(table_id: str, name: str, page: int = 1, rows=(("a", "b"),)) -> Table:
    return Table(id=table_id, name=name, page=page, rows=tuple(tuple(r) for r in rows))


class TestExtractTables:
    """Tests for extract_tables."""

    def test_extracts_captioned_table(self, make_document):
        """Test that a caption followed by column rows becomes a table."""
        doc = make_document([["표 1: 파일 헤더", "필드명  타입  설명", "Version  UINT32  버전"]])

        tables = extract_tables(doc)

        assert len(tables) == 1
        assert tables[0].id == "table-1"
        assert tables[0].name == "파일 헤더"
        assert tables[0].page == 1
        assert tables[0].rows == (("필드명", "타입", "설명"), ("Version", "UINT32", "버전"))

    def test_document_without_tables(self, make_document):
        doc = make_document([["일반 텍스트 내용"]])
        assert extract_tables(doc) == []

    def test_caption_without_rows_is_dropped(self, make_document):
        """Test that a caption with nothing tabular after it yields no table."""
        assert extract_tables(make_document([["표 1: 파일 헤더"]])) == []
        assert extract_tables(make_document([["표 1: 파일 헤더", "일반 텍스트 내용"]])) == []
        assert extract_tables(make_document([["표 1: 파일 헤더", "", "일반 텍스트"]])) == []

    def test_blank_line_between_rows(self, make_document):
        """Test that a blank line followed by a row continues the table."""
        doc = make_document([["Table 2: Record", "a  b", "", "c  d", "Trailing prose"]])

        tables = extract_tables(doc)

        assert tables[0].rows == (("a", "b"), ("c", "d"))

    def test_blank_line_then_prose_ends_table(self, make_document):
        doc = make_document([["표 3: 속성", "a  b", "", "본문", "c  d"]])
        assert extract_tables(doc)[0].rows == (("a", "b"),)

    def test_prose_line_ends_table(self, make_document):
        doc = make_document([["표 3: 속성", "a  b", "본문 설명", "c  d"]])
        assert extract_tables(doc)[0].rows == (("a", "b"),)

    def test_section_heading_ends_table(self, make_document):
        """Test that the next numbered heading closes the table."""
        doc = make_document([["표 4: 속성", "a  b", "2.1 다음 섹션", "c  d"]])
        assert extract_tables(doc)[0].rows == (("a", "b"),)

    def test_column_spaced_heading_ends_table(self, make_document):
        """Test that a heading split by a column gap is not read as a row."""
        doc = make_document(
            [["표 1: 파일 인식 정보", "자료형  길이  설명", "DWORD  4  버전", "3.2  문서 정보", "본문"]]
        )

        assert extract_tables(doc)[0].rows == (("자료형", "길이", "설명"), ("DWORD", "4", "버전"))
        assert [s.id for s in extract_sections(doc)] == ["3.2"]

    def test_heading_with_type_keyword_ends_table(self, make_document):
        doc = make_document([["표 2: 레코드", "자료형  길이", "WORD  2", "4.1 DWORD 배열 구조"]])
        assert extract_tables(doc)[0].rows == (("자료형", "길이"), ("WORD", "2"))

    def test_blank_line_before_heading_ends_table(self, make_document):
        doc = make_document([["표 3: 속성", "a  b", "", "5.1  다음 절", "c  d"]])
        assert extract_tables(doc)[0].rows == (("a", "b"),)

    def test_numeric_cells_stay_in_table(self, make_document):
        """Test that a row of numbers is not mistaken for a heading."""
        doc = make_document([["표 4: 크기", "필드  바이트", "32  4"]])
        assert extract_tables(doc)[0].rows == (("필드", "바이트"), ("32", "4"))

    def test_tab_separated_rows(self, make_document):
        doc = make_document([["표 5: 탭", "Name\tType\tDesc", "id\tUINT16\t아이디"]])
        assert extract_tables(doc)[0].rows == (
            ("Name", "Type", "Desc"),
            ("id", "UINT16", "아이디"),
        )

    def test_structured_token_row(self, make_document):
        """Test that a single-spaced line with a type keyword is one cell row."""
        doc = make_document([["표 6: 형식", "Version UINT32 버전"]])
        assert extract_tables(doc)[0].rows == (("Version UINT32 버전",),)

    def test_bare_header_form(self, make_document):
        """Test that a marker line without a colon name uses the whole line as name."""
        doc = make_document([["표 5 문서 속성", "a  b"]])

        tables = extract_tables(doc)

        assert tables[0].id == "table-5"
        assert tables[0].name == "표 5 문서 속성"

    def test_bracketed_caption(self, make_document):
        doc = make_document([["[표 1-2] : 문서 속성", "a  b"]])
        tables = extract_tables(doc)
        assert tables[0].id == "table-1-2"
        assert tables[0].name == "문서 속성"

    def test_caption_recorded_once(self, make_document):
        """Test that a caption line is not also recorded as a bare header."""
        doc = make_document([["Table 7: Header", "a  b"]])
        assert len(find_table_candidates(doc)) == 1

    def test_tables_on_several_pages(self, make_document):
        doc = make_document(
            [
                ["표 1: 첫째", "a  b"],
                ["본문"],
                ["표 2: 둘째", "c  d"],
            ]
        )
        tables = extract_tables(doc)
        assert [(t.id, t.page) for t in tables] == [("table-1", 1), ("table-2", 3)]

    def test_table_does_not_cross_pages(self, make_document):
        doc = make_document([["표 1: 첫째"], ["a  b"]])
        assert extract_tables(doc) == []

    def test_never_emits_empty_tables(self, spec_document):
        for table in extract_tables(spec_document):
            assert len(table.rows) > 0


class TestFindTableByNameOrId:
    """Tests for find_table_by_name_or_id."""

    tables = [
        _table("table-1", "파일 헤더", 1, [("a", "b")]),
        _table("table-2", "문서 정보", 2, [("c", "d")]),
        _table("table-1-1", "상세 구조", 3, [("e", "f")]),
    ]

    def test_by_id(self):
        result = find_table_by_name_or_id(self.tables, "table-1")
        assert result.id == "table-1"
        assert result.name == "파일 헤더"

    def test_by_id_case_insensitive(self):
        assert find_table_by_name_or_id(self.tables, "TABLE-2").id == "table-2"

    def test_by_number(self):
        assert find_table_by_name_or_id(self.tables, "2").id == "table-2"

    def test_by_dashed_number(self):
        assert find_table_by_name_or_id(self.tables, "1-1").id == "table-1-1"

    def test_number_with_surrounding_spaces(self):
        tables = [_table("table-3", "셋째"), _table("table-13", "3 관련")]
        assert find_table_by_name_or_id(tables, " 3 ").id == "table-3"

    def test_by_partial_name(self):
        assert find_table_by_name_or_id(self.tables, "문서").name == "문서 정보"

    def test_not_found(self):
        assert find_table_by_name_or_id(self.tables, "nonexistent") is None

    def test_blank_query(self):
        assert find_table_by_name_or_id(self.tables, "  ") is None


class TestFormatTable:
    """Tests for format_table."""

    def test_formats_padded_columns(self):
        """Test header line and equal-width, pipe-delimited columns."""
        table = _table("table-1", "테스트 테이블", 5, [("A", "Long value"), ("Longer", "B")])

        formatted = format_table(table)

        assert formatted.split("\n") == [
            "Table table-1: 테스트 테이블 (page 5)",
            "",
            "| A      | Long value |",
            "| Longer | B          |",
        ]

    def test_contains_every_cell(self):
        table = _table("table-1", "t", 1, [("Column A", "Column B"), ("Value 1", "Value 2")])
        formatted = format_table(table)
        for cell in ("Column A", "Column B", "Value 1", "Value 2"):
            assert cell in formatted

    def test_ragged_rows(self):
        table = _table("table-9", "t", 1, [("a", "b", "c"), ("dd",)])
        lines = format_table(table).split("\n")
        assert lines[2] == "| a  | b | c |"
        assert lines[3] == "| dd |"

    def test_empty_table(self):
        table = Table(id="table-empty", name="빈 테이블", page=1, rows=())
        assert format_table(table) == "Table: 빈 테이블 (empty)"
