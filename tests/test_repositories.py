import pytest

from errors import ConflictError
from repositories import Ok, generate_id


def doctor_input(**overrides):
    data = {
        "name": "دکتر مریم کاظمی",
        "specialty": "دامپزشک عمومی",
        "phone": "021-11112222",
        "address": "تهران، خیابان انقلاب",
        "province": "تهران",
        "city": "تهران",
        "latitude": 35.7,
        "longitude": 51.4,
    }
    data.update(overrides)
    return data


def product_input(**overrides):
    data = {
        "name": "توپ بازی سگ",
        "categoryId": "dog",
        "description": "توپ لاستیکی مقاوم",
        "image": "https://example.com/ball.png",
        "price": 100000,
        "stock": 5,
    }
    data.update(overrides)
    return data


def slide_input(order):
    return {
        "title": f"اسلاید {order}",
        "description": "توضیحات",
        "accent": "ویژه",
        "image": "https://example.com/slide.png",
        "ctaLabel": "مشاهده",
        "ctaLink": "/shop",
        "order": order,
    }


def test_generated_ids_do_not_collide():
    ids = {generate_id("post") for _ in range(200)}
    assert len(ids) == 200
    assert all(i.startswith("post-") for i in ids)


def test_doctors_seeded_on_first_access(store, settings):
    doctors = store.doctors.list()

    assert len(doctors) == 9
    assert (settings.data_dir / "doctors.json").exists()
    assert isinstance(store.doctors.last_outcome, Ok)


def test_create_then_get_returns_input_plus_generated_fields(store):
    created = store.doctors.create(doctor_input())

    fetched = store.doctors.get_by_id(created["id"])

    assert fetched == created
    assert created["id"].startswith("doc-")
    assert created["createdAt"] == created["updatedAt"]
    for key, value in doctor_input().items():
        assert fetched[key] == value


def test_update_changes_only_given_fields(store):
    created = store.doctors.create(doctor_input(description="قدیمی"))

    updated = store.doctors.update(created["id"], {"phone": "021-99998888", "description": None, "id": "hijack"})

    assert updated["id"] == created["id"]
    assert updated["phone"] == "021-99998888"
    assert updated["description"] == "قدیمی"
    assert updated["name"] == created["name"]
    assert updated["createdAt"] == created["createdAt"]
    assert updated["updatedAt"] >= created["updatedAt"]
    assert store.doctors.get_by_id(created["id"]) == updated


def test_update_unknown_id_returns_none(store):
    assert store.doctors.update("doc-missing", {"phone": "1"}) is None


def test_delete(store):
    created = store.doctors.create(doctor_input())

    assert store.doctors.delete(created["id"]) is True
    assert store.doctors.get_by_id(created["id"]) is None
    assert store.doctors.delete(created["id"]) is False


def test_doctor_filters_are_exact_and_combined(store):
    store.doctors.create(doctor_input(province="فارس", city="مرودشت"))

    in_fars = store.doctors.list({"province": "فارس"})
    shiraz = store.doctors.list({"province": "فارس", "city": "شیراز"})

    assert {d["city"] for d in in_fars} == {"شیراز", "مرودشت"}
    assert [d["id"] for d in shiraz] == ["d-5"]
    assert store.doctors.list({"province": "فارس", "city": "تبریز"}) == []


def test_doctors_newest_first(store):
    created = store.doctors.create(doctor_input())

    assert store.doctors.list()[0]["id"] == created["id"]


def test_stores_are_isolated(tmp_path, settings):
    from config import Settings
    from repositories import Store

    first = Store(settings)
    other = Store(Settings(data_dir=tmp_path / "other"))
    first.doctors.create(doctor_input())

    assert len(first.doctors.list()) == 10
    assert len(other.doctors.list()) == 9


def test_product_update_scenario(store):
    created = store.products.create(product_input())

    updated = store.products.update(created["id"], {"stock": 3})

    assert updated["price"] == 100000
    assert updated["stock"] == 3
    assert updated["updatedAt"] >= created["updatedAt"]


def test_product_category_and_search_compose(store):
    cat_items = store.products.list({"categoryId": "cat", "search": "گربه"})

    assert cat_items
    assert all(p["categoryId"] == "cat" for p in cat_items)
    assert store.products.list({"categoryId": "dog", "search": "گربه"}) == []


def test_product_search_is_case_insensitive_and_covers_brand(store):
    found = store.products.list({"search": "  ROYAL "})

    assert [p["id"] for p in found] == ["p-1"]


def test_slides_sorted_by_order_then_creation(store):
    for slide in store.slides.list():
        store.slides.delete(slide["id"])

    third = store.slides.create(slide_input(3))
    first = store.slides.create(slide_input(1))
    second = store.slides.create(slide_input(1))

    assert [s["id"] for s in store.slides.list()] == [first["id"], second["id"], third["id"]]


def test_slide_order_defaults_to_end(store):
    data = slide_input(None)
    del data["order"]

    created = store.slides.create(data)

    assert created["order"] == 4
    assert store.slides.list()[-1]["id"] == created["id"]


def test_slide_update_keeps_order_when_absent(store):
    updated = store.slides.update("slide-2", {"title": "عنوان تازه", "order": None})

    assert updated["order"] == 2
    assert updated["title"] == "عنوان تازه"


def test_post_image_defaults_from_title(store):
    post = store.posts.create({"title": "نگهداری از سگ در آپارتمان", "content": "متن"})

    assert post["image"] == "https://source.unsplash.com/800x600/?dog,animal"
    assert post["published"] is False


def test_published_posts(store):
    draft = store.posts.create({"title": "پیش‌نویس", "content": "متن", "published": False})
    live = store.posts.create({"title": "منتشر شده", "content": "متن", "published": True})

    ids = [p["id"] for p in store.posts.published()]

    assert live["id"] in ids
    assert draft["id"] not in ids
    assert len(store.posts.list()) == 3


def test_reservations_for_doctor_newest_first(store):
    base = {"doctorName": "دکتر لیلا محمدی", "patientName": "علی", "phone": "0912", "preferredDate": "1403-05-01"}
    first = store.reservations.create({**base, "doctorId": "d-1"})
    store.reservations.create({**base, "doctorId": "d-2"})
    second = store.reservations.create({**base, "doctorId": "d-1", "status": "confirmed"})

    found = store.reservations.list({"doctorId": "d-1"})

    assert [r["id"] for r in found] == [second["id"], first["id"]]
    assert all(r["status"] == "pending" for r in found)


def test_reservations_start_empty(store):
    assert store.reservations.list() == []


def test_seeded_admin_can_authenticate(store):
    admin = store.users.authenticate(" Admin@Example.com ", "admin123")

    assert admin["role"] == "admin"
    assert store.users.authenticate("admin@example.com", "wrong") is None
    assert store.users.authenticate("nobody@example.com", "admin123") is None


def test_user_email_normalized_and_password_hashed(store):
    user = store.users.create({"email": "  Sara@Example.com", "name": " سارا ", "password": "secret1"})

    assert user["email"] == "sara@example.com"
    assert user["name"] == "سارا"
    assert user["role"] == "user"
    assert user["password"] != "secret1"
    assert store.users.get_by_email("SARA@example.com")["id"] == user["id"]


def test_duplicate_email_conflicts(store):
    store.users.create({"email": "sara@example.com", "name": "سارا", "password": "secret1"})

    with pytest.raises(ConflictError):
        store.users.create({"email": "SARA@example.com ", "name": "دیگری", "password": "secret2"})
    assert len(store.users.list()) == 2


def test_list_masked_hides_passwords(store):
    users = store.users.list_masked()

    assert users[0]["email"] == "admin@example.com"
    assert all(u["password"] == "***hidden***" for u in users)
