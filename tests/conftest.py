import pytest


@pytest.fixture
def table():
    return {
        "en": {
            "hello": "Hello",
            "welcome": "Welcome, {name}!",
            "greeting": {
                "male": "Hi man",
                "female": "Hi woman",
                "other": "Hi there",
            },
            "day": {
                "zero": "no days",
                "one": "{} day",
                "many": "{} days",
                "other": "{} days",
            },
            "money": {
                "one": "{name} has {} dollar",
                "other": "{name} has {} dollars",
            },
            "only_en": "English only",
        },
        "ru": {
            "hello": "Привет",
            "welcome": "Добро пожаловать, {name}!",
            "day": {
                "one": "{} день",
                "few": "{} дня",
                "many": "{} дней",
                "other": "{} дня",
            },
        },
        "ar": {
            "day": {
                "zero": "لا أيام",
                "one": "يوم واحد",
                "two": "يومان",
                "few": "{} أيام",
                "many": "{} يومًا",
                "other": "{} يوم",
            },
        },
    }
