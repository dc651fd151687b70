import logging
import os
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import EmailStr, Field, field_validator

from auth import SessionClaims, clear_session_cookie, get_session, require_admin, set_session_cookie
from config import Settings
from errors import AuthorizationError, NotFoundError, StoreError, ValidationError
from repositories import Store
from schemas import ProductCategoryId
from seeds import PRODUCT_CATEGORIES
from validation import INVALID_INPUT, INVALID_REQUEST, Input, OptionalText, Text, invalid, split_lines

logger = logging.getLogger(__name__)

router = APIRouter()


def get_store(request: Request) -> Store:
    return request.app.state.store


def user_summary(user: dict) -> Dict[str, Any]:
    return {"id": user["id"], "email": user["email"], "name": user["name"], "role": user["role"]}


# Routes
@router.get("/")
def read_root():
    return {"message": "Pet24 Storefront API"}


@router.get("/test")
def test_database(store: Store = Depends(get_store)):
    response = {
        "backend": "✅ Running",
        "database": "❌ Not Available",
        "database_url": "✅ Set" if store.documents.enabled else "❌ Not Set",
        "database_name": store.documents.name,
        "connection_status": "Not Connected",
        "collections": [],
        "file_store": str(store.files.data_dir),
        "read_only": store.files.read_only,
    }
    if not store.documents.enabled:
        response["database"] = "⚠️ Using file store"
        return response
    try:
        db = store.documents.get_database()
        response["database"] = "✅ Available"
        response["connection_status"] = "Connected"
        response["collections"] = db.list_collection_names()
    except Exception as e:
        response["database"] = f"❌ Error: {str(e)[:80]}"
    return response


# Posts
class PostIn(Input):
    required_message = "عنوان و محتوا الزامی است"

    title: Text
    content: Text
    published: bool = False
    image: OptionalText = None


@router.get("/api/posts")
def list_posts(store: Store = Depends(get_store)):
    return store.posts.list()


@router.get("/api/posts/published")
def list_published_posts(store: Store = Depends(get_store)):
    return store.posts.published()


@router.post("/api/posts", status_code=201)
def create_post(data: PostIn, store: Store = Depends(get_store)):
    return store.posts.create(data.model_dump(by_alias=True))


@router.get("/api/posts/{post_id}")
def get_post(post_id: str, store: Store = Depends(get_store)):
    post = store.posts.get_by_id(post_id)
    if not post:
        raise NotFoundError("پست یافت نشد")
    return post


@router.put("/api/posts/{post_id}")
def update_post(post_id: str, data: PostIn, store: Store = Depends(get_store)):
    # A post edit always sends the whole form; an unchecked box unpublishes
    post = store.posts.update(post_id, data.model_dump(by_alias=True))
    if not post:
        raise NotFoundError("پست یافت نشد")
    return post


@router.delete("/api/posts/{post_id}")
def delete_post(post_id: str, store: Store = Depends(get_store)):
    if not store.posts.delete(post_id):
        raise NotFoundError("پست یافت نشد")
    return {"message": "پست با موفقیت حذف شد"}


# Doctors
DOCTOR_MESSAGES = {
    "latitude": "مختصات عرضی نامعتبر است",
    "longitude": "مختصات طولی نامعتبر است",
}


class DoctorIn(Input):
    messages = DOCTOR_MESSAGES

    name: Text
    specialty: Text
    phone: Text
    address: Text
    province: Text
    city: Text
    description: OptionalText = None
    map_url: OptionalText = None
    latitude: Optional[float] = Field(None, allow_inf_nan=False)
    longitude: Optional[float] = Field(None, allow_inf_nan=False)
    photo: OptionalText = None


class DoctorUpdate(Input):
    messages = DOCTOR_MESSAGES

    name: OptionalText = None
    specialty: OptionalText = None
    phone: OptionalText = None
    address: OptionalText = None
    province: OptionalText = None
    city: OptionalText = None
    description: OptionalText = None
    map_url: OptionalText = None
    latitude: Optional[float] = Field(None, allow_inf_nan=False)
    longitude: Optional[float] = Field(None, allow_inf_nan=False)
    photo: OptionalText = None


@router.get("/api/doctors")
def list_doctors(province: Optional[str] = None, city: Optional[str] = None, store: Store = Depends(get_store)):
    doctors = store.doctors.list({"province": province, "city": city})
    return store.media.ensure_photos(doctors)


@router.post("/api/doctors", status_code=201)
def create_doctor(data: DoctorIn, store: Store = Depends(get_store), _: SessionClaims = Depends(require_admin)):
    doctor = store.doctors.create(data.model_dump(by_alias=True))
    return store.media.ensure_photos([doctor])[0]


@router.get("/api/doctors/{doctor_id}")
def get_doctor(doctor_id: str, store: Store = Depends(get_store)):
    doctor = store.doctors.get_by_id(doctor_id)
    if not doctor:
        raise NotFoundError("پزشک یافت نشد")
    return store.media.ensure_photos([doctor])[0]


@router.put("/api/doctors/{doctor_id}")
def update_doctor(doctor_id: str, data: DoctorUpdate, store: Store = Depends(get_store), _: SessionClaims = Depends(require_admin)):
    doctor = store.doctors.update(doctor_id, data.model_dump(by_alias=True, exclude_unset=True))
    if not doctor:
        raise NotFoundError("پزشک یافت نشد")
    return store.media.ensure_photos([doctor])[0]


@router.delete("/api/doctors/{doctor_id}")
def delete_doctor(doctor_id: str, store: Store = Depends(get_store), _: SessionClaims = Depends(require_admin)):
    if not store.doctors.delete(doctor_id):
        raise NotFoundError("پزشک یافت نشد")
    return {"message": "پزشک با موفقیت حذف شد"}


# Products
PRODUCT_MESSAGES = {
    "categoryId": "دسته‌بندی نامعتبر است",
    "price": "قیمت نامعتبر است",
    "stock": "موجودی نامعتبر است",
}


class ProductIn(Input):
    messages = PRODUCT_MESSAGES

    name: Text
    category_id: ProductCategoryId
    description: Text
    image: Text
    price: float = Field(..., gt=0, allow_inf_nan=False)
    stock: int = Field(..., ge=0)
    brand: OptionalText = None
    weight: OptionalText = None
    highlights: Optional[List[str]] = None

    @field_validator("highlights", mode="before")
    @classmethod
    def highlight_lines(cls, value):
        return split_lines(value)


class ProductUpdate(Input):
    messages = PRODUCT_MESSAGES

    name: OptionalText = None
    category_id: Optional[ProductCategoryId] = None
    description: OptionalText = None
    image: OptionalText = None
    price: Optional[float] = Field(None, gt=0, allow_inf_nan=False)
    stock: Optional[int] = Field(None, ge=0)
    brand: OptionalText = None
    weight: OptionalText = None
    highlights: Optional[List[str]] = None

    @field_validator("highlights", mode="before")
    @classmethod
    def highlight_lines(cls, value):
        return split_lines(value)


@router.get("/api/products")
def list_products(categoryId: Optional[str] = None, search: Optional[str] = None, store: Store = Depends(get_store)):
    products = store.products.list({"categoryId": categoryId, "search": search})
    return {"categories": PRODUCT_CATEGORIES, "products": store.media.ensure_images(products)}


@router.post("/api/products", status_code=201)
def create_product(data: ProductIn, store: Store = Depends(get_store), _: SessionClaims = Depends(require_admin)):
    product = store.products.create(data.model_dump(by_alias=True))
    return store.media.ensure_images([product])[0]


@router.get("/api/products/{product_id}")
def get_product(product_id: str, store: Store = Depends(get_store)):
    product = store.products.get_by_id(product_id)
    if not product:
        raise NotFoundError("محصول یافت نشد")
    return store.media.ensure_images([product])[0]


@router.put("/api/products/{product_id}")
def update_product(product_id: str, data: ProductUpdate, store: Store = Depends(get_store), _: SessionClaims = Depends(require_admin)):
    product = store.products.update(product_id, data.model_dump(by_alias=True, exclude_unset=True))
    if not product:
        raise NotFoundError("محصول یافت نشد")
    return store.media.ensure_images([product])[0]


@router.delete("/api/products/{product_id}")
def delete_product(product_id: str, store: Store = Depends(get_store), _: SessionClaims = Depends(require_admin)):
    if not store.products.delete(product_id):
        raise NotFoundError("محصول یافت نشد")
    return {"message": "محصول با موفقیت حذف شد"}


# Slides
SLIDE_MESSAGES = {"order": "ترتیب اسلاید نامعتبر است"}


class SlideIn(Input):
    messages = SLIDE_MESSAGES

    title: Text
    description: Text
    accent: Text
    image: Text
    cta_label: Text
    cta_link: Text
    order: Optional[int] = None


class SlideUpdate(Input):
    messages = SLIDE_MESSAGES

    title: OptionalText = None
    description: OptionalText = None
    accent: OptionalText = None
    image: OptionalText = None
    cta_label: OptionalText = None
    cta_link: OptionalText = None
    order: Optional[int] = None


@router.get("/api/slides")
def list_slides(store: Store = Depends(get_store)):
    return store.slides.list()


@router.post("/api/slides", status_code=201)
def create_slide(data: SlideIn, store: Store = Depends(get_store), _: SessionClaims = Depends(require_admin)):
    return store.slides.create(data.model_dump(by_alias=True))


@router.get("/api/slides/{slide_id}")
def get_slide(slide_id: str, store: Store = Depends(get_store)):
    slide = store.slides.get_by_id(slide_id)
    if not slide:
        raise NotFoundError("اسلاید یافت نشد")
    return slide


@router.put("/api/slides/{slide_id}")
def update_slide(slide_id: str, data: SlideUpdate, store: Store = Depends(get_store), _: SessionClaims = Depends(require_admin)):
    slide = store.slides.update(slide_id, data.model_dump(by_alias=True, exclude_unset=True))
    if not slide:
        raise NotFoundError("اسلاید یافت نشد")
    return slide


@router.delete("/api/slides/{slide_id}")
def delete_slide(slide_id: str, store: Store = Depends(get_store), _: SessionClaims = Depends(require_admin)):
    if not store.slides.delete(slide_id):
        raise NotFoundError("اسلاید یافت نشد")
    return {"message": "اسلاید حذف شد"}


# Reservations
class ReservationIn(Input):
    required_message = "اطلاعات لازم برای رزرو تکمیل نشده است"

    doctor_id: Text
    patient_name: Text
    phone: Text
    preferred_date: Text
    preferred_time: OptionalText = None
    note: OptionalText = None


@router.get("/api/reservations")
def list_reservations(doctorId: Optional[str] = None, store: Store = Depends(get_store), _: SessionClaims = Depends(require_admin)):
    return store.reservations.list({"doctorId": doctorId})


@router.post("/api/reservations", status_code=201)
def create_reservation(data: ReservationIn, store: Store = Depends(get_store)):
    doctor = store.doctors.get_by_id(data.doctor_id)
    if not doctor:
        raise NotFoundError("پزشک یافت نشد")
    return store.reservations.create({**data.model_dump(by_alias=True), "doctorName": doctor["name"]})


# Auth models
class LoginIn(Input):
    required_message = "ایمیل و رمز عبور الزامی است"

    email: Text
    password: str


class SignupIn(Input):
    required_message = "تمام فیلدها الزامی است"
    messages = {"email": "ایمیل نامعتبر است"}

    email: EmailStr
    name: Text
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def trim_email(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("password")
    @classmethod
    def long_enough(cls, value):
        if len(value) < 6:
            raise invalid("رمز عبور باید حداقل ۶ کاراکتر باشد")
        return value


@router.post("/api/auth/login")
def login(response: Response, data: LoginIn, store: Store = Depends(get_store)):
    user = store.users.authenticate(data.email, data.password)
    if not user:
        raise AuthorizationError("ایمیل یا رمز عبور اشتباه است")

    set_session_cookie(response, store.tokens.issue(user), secure=store.settings.secure_cookies)
    logger.info("Login successful for %s", user["email"])
    return {"success": True, "user": user_summary(user)}


@router.post("/api/auth/signup", status_code=201)
def signup(response: Response, data: SignupIn, store: Store = Depends(get_store)):
    user = store.users.create({"email": str(data.email), "name": data.name, "password": data.password, "role": "user"})
    set_session_cookie(response, store.tokens.issue(user), secure=store.settings.secure_cookies)
    logger.info("Signed up %s", user["email"])
    return {"success": True, "user": user_summary(user)}


@router.get("/api/auth/session")
def session(claims: Optional[SessionClaims] = Depends(get_session)):
    return {"user": claims.public() if claims else None}


@router.post("/api/auth/logout")
def logout(response: Response):
    clear_session_cookie(response)
    return {"success": True}


# Debug listings
@router.get("/api/auth/debug")
def debug_user(email: Optional[str] = None, store: Store = Depends(get_store)):
    if not email:
        return {
            "message": "Provide email query parameter",
            "example": "/api/auth/debug?email=user@example.com",
        }
    user = store.users.get_by_email(email)
    if not user:
        return {"found": False, "message": "User not found"}
    return {
        "found": True,
        "email": user["email"],
        "name": user["name"],
        "role": user["role"],
        "hasPassword": bool(user.get("password")),
    }


@router.get("/api/auth/list-users")
def list_users(store: Store = Depends(get_store)):
    users = store.users.list_masked()
    return {"count": len(users), "users": users}


def store_error_handler(request: Request, exc: StoreError):
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


def request_validation_handler(request: Request, exc: RequestValidationError):
    message = next((e["msg"] for e in exc.errors() if e["type"] == INVALID_INPUT), INVALID_REQUEST)
    return store_error_handler(request, ValidationError(message))


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    store = Store(settings or Settings.from_env())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        store.close()

    app = FastAPI(title="Pet24 Storefront API", lifespan=lifespan)
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)
