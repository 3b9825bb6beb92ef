from app.ocr.tables import extract_tables


class TestExtractTables:
    def test_detects_tab_separated_rows(self) -> None:
        text = "Benefits\nType\tCoverage\nHealth\tFull\nDental\tBasic\nEnd"
        tables = extract_tables(text)
        assert len(tables) == 1
        assert tables[0].headers == ["Type", "Coverage"]
        assert tables[0].rows == [["Health", "Full"], ["Dental", "Basic"]]

    def test_detects_space_aligned_columns(self) -> None:
        text = "Name      Expiry\nPassport   2029-05-11"
        tables = extract_tables(text)
        assert len(tables) == 1
        assert tables[0].rows == [["Passport", "2029-05-11"]]

    def test_single_row_is_not_a_table(self) -> None:
        assert extract_tables("Header\tOnly\nplain line") == []

    def test_plain_text_has_no_tables(self) -> None:
        assert extract_tables("Name: John Smith\nSex: M") == []

    def test_separate_runs_become_separate_tables(self) -> None:
        text = "a\tb\nc\td\n\ne\tf\ng\th"
        assert len(extract_tables(text)) == 2
