"""UI string tables and lookup.

'en' is the base locale: keys missing from another table fall back to it.
"""

from __future__ import annotations

from typing import Any

BASE_LOCALE = "en"

TRANSLATIONS: dict[str, dict[str, str]] = {
    "en": {
        "header_title": "Tasks",
        "header_subtitle": "{count} tasks found",
        "loading": "Loading...",
        "filter_all": "All",
        "filter_open": "Open",
        "filter_completed": "Completed",
        "empty_list": "No tasks found for this filter.",
        "input_placeholder": "Add something to do...",
        "uncategorized": "Uncategorized",
        "deleted_category": "Deleted Category",
        "default_category": "General",
        "category_name_placeholder": "Category Name",
        "add_to": "Add to",
        "category_color": "Color",
        "error_title": "Error",
        "error_task_empty": "Task title cannot be empty.",
        "error_category_empty": "Category name cannot be empty.",
        "delete_category_title": "Delete Category",
        "delete_category_body": "Are you sure you want to delete this category? "
        "Tasks in this category will be marked as 'Uncategorized'.",
        "cancel": "Cancel",
        "delete": "Delete",
        "theme_title": "Theme",
        "theme_light": "Light",
        "theme_dark": "Dark",
        "theme_system": "System",
        "language_title": "Language",
        "language_system": "System",
    },
    "tr": {
        "header_title": "Görevler",
        "header_subtitle": "{count} adet görev bulundu",
        "loading": "Yükleniyor...",
        "filter_all": "Tümü",
        "filter_open": "Açık",
        "filter_completed": "Tamamlanan",
        "empty_list": "Bu filtreye uygun görev yok.",
        "input_placeholder": "Yapılacak bir şey ekle...",
        "uncategorized": "Kategorisiz",
        "deleted_category": "Silinmiş Kategori",
        "default_category": "Genel",
        "category_name_placeholder": "Kategori Adı",
        "add_to": "Eklenecek",
        "category_color": "Renk",
        "error_title": "Hata",
        "error_task_empty": "Görev başlığı boş olamaz.",
        "error_category_empty": "Kategori adı boş olamaz.",
        "delete_category_title": "Kategoriyi Sil",
        "delete_category_body": "Bu kategoriyi silmek istediğinizden emin misiniz? "
        "Bu kategoriye ait görevler 'Kategorisiz' olarak işaretlenecektir.",
        "cancel": "İptal",
        "delete": "Sil",
        "theme_title": "Tema",
        "theme_light": "Açık",
        "theme_dark": "Karanlık",
        "theme_system": "Sistem",
        "language_title": "Dil",
        "language_system": "Sistem",
    },
    # Partial tables; everything else comes from 'en'.
    "fr": {
        "header_title": "Tâches",
        "uncategorized": "Sans catégorie",
        "default_category": "Général",
        "theme_title": "Thème",
        "language_title": "Langue",
    },
    "de": {
        "header_title": "Aufgaben",
        "uncategorized": "Ohne Kategorie",
        "default_category": "Allgemein",
        "theme_title": "Design",
        "language_title": "Sprache",
    },
}

SUPPORTED_LOCALES = frozenset(TRANSLATIONS)

# Preference choices for the settings UI, in display order.
LANGUAGE_OPTIONS: list[tuple[str, str]] = [
    ("system", ""),  # label is translated at display time
    ("en", "English"),
    ("tr", "Türkçe"),
    ("fr", "Français"),
    ("de", "Deutsch"),
]


def translate(key: str, locale: str = BASE_LOCALE, **params: Any) -> str:
    """Look up *key* for *locale*, falling back to the base table, then the key."""
    table = TRANSLATIONS.get(locale, {})
    text = table.get(key)
    if text is None:
        text = TRANSLATIONS[BASE_LOCALE].get(key, key)
    if params:
        text = text.format(**params)
    return text


def language_label(code: str, locale: str = BASE_LOCALE) -> str:
    if code == "system":
        return translate("language_system", locale)
    for option, label in LANGUAGE_OPTIONS:
        if option == code:
            return label
    return code
