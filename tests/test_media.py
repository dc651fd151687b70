from media import DEFAULT_DOCTOR_IMAGE, MediaResolver, post_image_url


def test_doctor_photo_kept_and_trimmed():
    resolver = MediaResolver()

    [doctor] = resolver.ensure_photos([{"id": "d-1", "photo": "  /img/a.png "}])

    assert doctor["photo"] == "/img/a.png"
    assert resolver.doctor_photos["d-1"] == "/img/a.png"


def test_missing_doctor_photo_gets_default():
    resolver = MediaResolver()

    doctors = resolver.ensure_photos([{"id": "d-1", "photo": ""}, {"id": "d-2"}])

    assert [d["photo"] for d in doctors] == [DEFAULT_DOCTOR_IMAGE, DEFAULT_DOCTOR_IMAGE]


def test_product_placeholder_seeded_by_name():
    resolver = MediaResolver()

    [product] = resolver.ensure_images([{"id": "p-1", "name": "Cat Toy", "image": ""}])

    assert product["image"] == "https://api.dicebear.com/7.x/shapes/png?seed=Cat%20Toy&size=512"


def test_product_placeholder_is_stable_per_id():
    resolver = MediaResolver()
    resolver.ensure_images([{"id": "p-1", "name": "Cat Toy", "image": None}])

    [renamed] = resolver.ensure_images([{"id": "p-1", "name": "Dog Toy", "image": " "}])

    assert "seed=Cat%20Toy" in renamed["image"]


def test_unnamed_product_uses_id():
    resolver = MediaResolver()

    [product] = resolver.ensure_images([{"id": "p-9", "name": "", "image": ""}])

    assert "seed=p-9" in product["image"]


def test_post_image_keywords():
    assert post_image_url("غذای گربه") == "https://source.unsplash.com/800x600/?cat,animal"
    assert post_image_url("آموزش خرگوش") == "https://source.unsplash.com/800x600/?rabbit,animal"
    assert post_image_url("Welcome") == "https://source.unsplash.com/800x600/?pet,animal"
