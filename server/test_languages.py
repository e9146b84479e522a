# test_languages.py

from services.translation.fallback import dictionary_translate, untranslated_notice
from services.translation.languages import is_pair_supported, language_name, resolve_base

def test_resolve_base_strips_region():
    assert resolve_base("es-ES") == "es"
    assert resolve_base("pt-BR") == "pt"
    assert resolve_base("fr") == "fr"

def test_resolve_base_defaults_to_english():
    assert resolve_base("xx-YY") == "en"
    assert resolve_base("") == "en"

def test_pair_support_is_directed():
    assert is_pair_supported("en", "ja")
    assert is_pair_supported("ja", "en")
    assert not is_pair_supported("ja", "es")
    assert not is_pair_supported("xx", "en")

def test_language_name_falls_back_to_code():
    assert language_name("es") == "Spanish"
    assert language_name("ko") == "ko"

def test_dictionary_only_changes_known_tokens():
    assert dictionary_translate("Call the Doctor, please!", "es") == "call the médico please!"

def test_dictionary_unknown_target_leaves_text_lowercased():
    assert dictionary_translate("Fever and PAIN", "ja") == "fever and pain"

def test_untranslated_notice_names_target():
    assert untranslated_notice("Hello", "fr") == "Hello [Would be translated to French]"
    assert untranslated_notice("Hello", "ko") == "Hello [Would be translated to ko]"
