from typing import Dict, List
from urllib.parse import quote

DEFAULT_DOCTOR_IMAGE = "/images/default-doctor.svg"

POST_IMAGE_KEYWORDS = {
    "گربه": "cat",
    "سگ": "dog",
    "حیوان": "pet",
    "پت": "pet",
    "خرگوش": "rabbit",
    "پرنده": "bird",
    "ماهی": "fish",
    "همستر": "hamster",
    "خوک": "guinea-pig",
}


def _clean(value) -> str:
    return value.strip() if isinstance(value, str) else ""


def dicebear_url(style: str, seed: str) -> str:
    return f"https://api.dicebear.com/7.x/{style}/png?seed={quote(seed, safe='')}&size=512"


def post_image_url(title: str) -> str:
    keyword = "pet"
    for persian, english in POST_IMAGE_KEYWORDS.items():
        if persian in title:
            keyword = english
            break
    return f"https://source.unsplash.com/800x600/?{keyword},animal"


class MediaResolver:
    """Fills empty doctor photos and product images, remembering each assignment by id."""

    def __init__(self):
        self.doctor_photos: Dict[str, str] = {}
        self.product_images: Dict[str, str] = {}

    def ensure_photos(self, doctors: List[dict]) -> List[dict]:
        for doctor in doctors:
            current = _clean(doctor.get("photo"))
            if current:
                doctor["photo"] = current
                self.doctor_photos[doctor["id"]] = current
                continue
            doctor["photo"] = self.doctor_photos.setdefault(doctor["id"], DEFAULT_DOCTOR_IMAGE)
        return doctors

    def ensure_images(self, products: List[dict]) -> List[dict]:
        for product in products:
            current = _clean(product.get("image"))
            if current:
                product["image"] = current
                self.product_images[product["id"]] = current
                continue
            if product["id"] not in self.product_images:
                # Unnamed products without an id fall back to their position in the cache
                seed = product.get("name") or product["id"] or f"product-{len(self.product_images) + 1}"
                self.product_images[product["id"]] = dicebear_url("shapes", seed)
            product["image"] = self.product_images[product["id"]]
        return products
