from novel_ingestion.models.chapter import ExtractionResult
from novel_ingestion.processors.script_normalizer import (
    ScriptNormalizer,
    convert_simplified_to_traditional,
    count_simplified,
)


def make_result(title, content):
    return ExtractionResult(title=title, content=content, source_url="https://novel.example/1.html")


def test_convert_simplified_to_traditional():
    assert convert_simplified_to_traditional("他们说这个国家的故事") == "他們說這個國家的故事"
    assert convert_simplified_to_traditional("") == ""


def test_count_simplified_ignores_traditional_text():
    assert count_simplified("他們說這個國家的故事") == 0
    assert count_simplified("他们说这个国家") >= 4


def test_normalize_converts_title_and_content():
    result = make_result("第一章 开始", "他们说这个国家的故事")
    normalized = ScriptNormalizer().normalize(result)

    assert normalized.title == "第一章 開始"
    assert normalized.content == "他們說這個國家的故事"
    assert normalized.source_url == result.source_url


def test_traditional_input_is_returned_untouched():
    result = make_result("第一章 開始", "他們說這個國家的故事")
    assert ScriptNormalizer().normalize(result) is result


def test_single_probe_hit_is_not_enough():
    result = make_result("第一章", "月光下的城门")
    assert ScriptNormalizer().normalize(result) is result


def test_failed_conversion_keeps_original_text():
    def broken(_):
        raise RuntimeError("dictionary missing")

    result = make_result("第一章 开始", "他们说这个国家的故事")
    assert ScriptNormalizer(convert=broken).normalize(result) is result


def test_navigation_fields_are_not_converted():
    result = make_result("开始", "这个国家")
    result.next_chapter_url = "https://novel.example/这个/2.html"
    normalized = ScriptNormalizer(convert=lambda text: text.upper() + "!").normalize(result)

    assert normalized.next_chapter_url == "https://novel.example/这个/2.html"
    assert normalized.content == "这个国家!"
