from aniex.core.errors import InvalidData, format_validation_errors


def test_format_validation_errors():
    errors = [
        {"loc": ("body", "title"), "msg": "String should have at least 1 character"},
        {"loc": ("body", "genres", 0), "msg": "Input should be a valid string"},
        {"loc": ("body",), "msg": "Field required"},
    ]
    assert format_validation_errors(errors) == [
        {"field": "title", "message": "String should have at least 1 character"},
        {"field": "genres.0", "message": "Input should be a valid string"},
        {"field": "body", "message": "Field required"},
    ]


def test_invalid_data_single():
    err = InvalidData.single("animeId", "Anime not found")
    assert err.errors == [{"field": "animeId", "message": "Anime not found"}]
    assert str(err) == "Invalid data"
