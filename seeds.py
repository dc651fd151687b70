"""Default records written to an empty store on first use."""

from typing import Any, Dict, List

from schemas import now_iso

PRODUCT_CATEGORIES: List[Dict[str, str]] = [
    {"id": "cat", "label": "لوازم گربه"},
    {"id": "dog", "label": "لوازم سگ"},
    {"id": "bird", "label": "ملزومات پرندگان"},
    {"id": "rabbit", "label": "لوازم خرگوش"},
    {"id": "small-pet", "label": "جوندگان و کوچک"},
    {"id": "accessory", "label": "اکسسوری و عمومی"},
]

DEFAULT_ADMIN_EMAIL = "admin@example.com"
DEFAULT_ADMIN_PASSWORD = "admin123"


def _stamp(records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    now = now_iso()
    return [{**record, "createdAt": now, "updatedAt": now} for record in records]


def _doctor(id, name, specialty, phone, address, province, city, description, lat, lng):
    return {
        "id": id,
        "name": name,
        "specialty": specialty,
        "phone": phone,
        "address": address,
        "province": province,
        "city": city,
        "description": description,
        "mapUrl": f"https://maps.google.com/?q={lat:.6f},{lng:.6f}",
        "latitude": lat,
        "longitude": lng,
        "photo": "",
    }


def default_doctors() -> List[Dict[str, Any]]:
    return _stamp([
        _doctor("d-1", "دکتر لیلا محمدی", "دامپزشک عمومی", "021-55667788",
                "تهران، خیابان ولیعصر، کوچه نیلوفر، پلاک ۱۲", "تهران", "تهران",
                "متخصص مراقبت از حیوانات خانگی کوچک با بیش از ۱۰ سال سابقه.", 35.706282, 51.401978),
        _doctor("d-2", "دکتر سامان رضایی", "جراح دامپزشک", "026-33112255",
                "البرز، کرج، خیابان آزادی، پلاک ۵۶", "البرز", "کرج",
                "جراح تخصصی حیوانات خانگی و حیوانات اگزوتیک.", 35.832702, 50.99155),
        _doctor("d-3", "دکتر پریسا یکتا", "متخصص داخلی حیوانات خانگی", "031-33669922",
                "اصفهان، خیابان چهارباغ عباسی، نبش کوچه فرهاد", "اصفهان", "اصفهان",
                "ارائه دهنده خدمات تشخیصی و تصویربرداری برای حیوانات خانگی.", 32.654627, 51.667983),
        _doctor("d-4", "دکتر آرش موحد", "متخصص پرندگان و حیوانات اگزوتیک", "013-44225511",
                "رشت، میدان شهرداری، ساختمان نیما، واحد ۴", "گیلان", "رشت",
                "دارای دوره تخصصی در مراقبت از پرندگان زینتی و حیوانات اگزوتیک.", 37.280833, 49.585278),
        _doctor("d-5", "دکتر نوید احمدی", "جراح ارتوپد حیوانات", "071-36224455",
                "شیراز، بلوار ستارخان، ساختمان مهر، طبقه دوم", "فارس", "شیراز",
                "متخصص جراحی ارتوپدی و فیزیوتراپی برای حیوانات آسیب دیده.", 29.591768, 52.583698),
        _doctor("d-6", "دکتر مهسا توکلی", "متخصص قلب و عروق حیوانات", "051-38552233",
                "مشهد، بلوار ساجدی، روبروی پارک ملت، پلاک ۲۷", "خراسان رضوی", "مشهد",
                "کنترل بیماری‌های قلبی و ارائه برنامه‌های مراقبتی ویژه.", 36.298824, 59.605743),
        _doctor("d-7", "دکتر حمیدرضا کرمی", "اورژانس و مراقبت ویژه", "061-34456677",
                "اهواز، کیانپارس، خیابان ۲۴ شرقی، پلاک ۱۸", "خوزستان", "اهواز",
                "پوشش ۲۴ ساعته برای بیماران اورژانسی و خدمات بستری.", 31.318327, 48.670618),
        _doctor("d-8", "دکتر سارا صادقی", "متخصص دندانپزشکی حیوانات", "041-35551122",
                "تبریز، خیابان آزادی، جنب پارک ائل گلی، پلاک ۹۲", "آذربایجان شرقی", "تبریز",
                "خدمات کامل جرم‌گیری، جراحی فک و مراقبت‌های دهان و دندان.", 38.066667, 46.299999),
        _doctor("d-9", "دکتر نازنین فرهمند", "پزشک عمومی حیوانات خانگی", "011-33221144",
                "ساری، بلوار خزر، نبش خیابان گلستان، پلاک ۷۵", "مازندران", "ساری",
                "ویزیت دوره‌ای، واکسیناسیون و تغذیه تخصصی برای حیوانات خانگی.", 36.563322, 53.060097),
    ])


def default_posts() -> List[Dict[str, Any]]:
    return _stamp([
        {
            "id": "1",
            "title": "خوش آمدید به فروشگاه حیوانات خانگی",
            "content": "این اولین پست وبلاگ ماست. در اینجا می‌توانید مطالب مفیدی درباره نگهداری از حیوانات خانگی پیدا کنید.",
            "image": "https://source.unsplash.com/800x600/?pet,cat",
            "published": True,
        },
    ])


def default_products() -> List[Dict[str, Any]]:
    return _stamp([
        {
            "id": "p-1",
            "name": "غذای خشک گربه رویال کنین",
            "categoryId": "cat",
            "description": "غذای کامل برای گربه‌های خانگی با ترکیبات متعادل و پروتئین بالا.",
            "image": "",
            "price": 890000,
            "stock": 20,
            "brand": "Royal Canin",
            "weight": "2 کیلوگرم",
            "highlights": ["تقویت سیستم ایمنی", "کمک به سلامت دندان‌ها", "هضم آسان"],
        },
        {
            "id": "p-2",
            "name": "قلاده قابل تنظیم سگ",
            "categoryId": "dog",
            "description": "قلاده پارچه‌ای نرم با قابلیت تنظیم اندازه و قفل ایمنی.",
            "image": "",
            "price": 320000,
            "stock": 45,
            "brand": "PetSafe",
            "highlights": ["ضد حساسیت", "قفل فلزی مقاوم", "نوار شب‌نما"],
        },
        {
            "id": "p-3",
            "name": "قفس پرندگان متوسط",
            "categoryId": "bird",
            "description": "قفس فلزی با پوشش ضدزنگ مناسب طوطی و مرغ عشق با سینی قابل شستشو.",
            "image": "",
            "price": 1250000,
            "stock": 10,
            "highlights": ["دارای تاب و ظرف آب", "کف کشویی", "در بزرگ برای تمیزکاری"],
        },
        {
            "id": "p-4",
            "name": "ست مراقبت از خرگوش",
            "categoryId": "rabbit",
            "description": "شامل برس، ناخن‌گیر و شامپو مخصوص خرگوش برای مراقبت روزانه.",
            "image": "",
            "price": 540000,
            "stock": 15,
            "highlights": ["برس نرم فیبری", "شامپوی بدون اشک", "ناخن‌گیر استیل"],
        },
        {
            "id": "p-5",
            "name": "غذای تشویقی سگ با طعم مرغ",
            "categoryId": "dog",
            "description": "تشویقی نرم مناسب آموزش با پروتئین بالا و بدون گلوتن.",
            "image": "",
            "price": 215000,
            "stock": 60,
            "highlights": ["بدون مواد نگهدارنده", "قابل استفاده برای تمامی نژادها"],
        },
        {
            "id": "p-6",
            "name": "اسباب‌بازی تعادلی گربه",
            "categoryId": "cat",
            "description": "اسباب‌بازی فنری با توپ LED برای سرگرمی و تحرک بیشتر گربه‌ها.",
            "image": "",
            "price": 175000,
            "stock": 35,
            "highlights": ["چراغ LED", "پایه ضدلغزش", "قابل استفاده برای دو گربه"],
        },
        {
            "id": "p-7",
            "name": "خانه چوبی همستر",
            "categoryId": "small-pet",
            "description": "خانه چندطبقه از چوب طبیعی بدون مواد شیمیایی برای همستر و خوکچه.",
            "image": "",
            "price": 460000,
            "stock": 12,
            "highlights": ["طراحی سه طبقه", "مقاوم در برابر رطوبت", "نصب آسان"],
        },
        {
            "id": "p-8",
            "name": "بطری آب مسافرتی حیوانات",
            "categoryId": "accessory",
            "description": "بطری آب ۵۰۰ میلی لیتری با ظرف تاشو مناسب سفر و پیاده‌روی.",
            "image": "",
            "price": 210000,
            "stock": 30,
            "highlights": ["بدون نشتی", "سبک و کم‌جا", "قابل استفاده برای گربه و سگ"],
        },
    ])


def default_slides() -> List[Dict[str, Any]]:
    return _stamp([
        {
            "id": "slide-1",
            "title": "هر آنچه دوست پشمالوی شما نیاز دارد",
            "description": "غذا، لوازم و خدمات تخصصی دامپزشکی در یک فضای مدرن با ارسال سریع.",
            "accent": "فروشگاه آنلاین",
            "image": "https://images.unsplash.com/photo-1548199973-03cce0bbc87b?auto=format&fit=crop&w=1400&q=80",
            "ctaLabel": "مشاهده فروشگاه",
            "ctaLink": "/shop",
            "order": 1,
        },
        {
            "id": "slide-2",
            "title": "رزرو سریع نوبت دامپزشکی",
            "description": "با پزشکان منتخب ما آشنا شوید و تنها با چند کلیک نوبت رزرو کنید.",
            "accent": "پزشکان معتبر",
            "image": "https://images.unsplash.com/photo-1518020382113-a7e8fc38eac9?auto=format&fit=crop&w=1400&q=80",
            "ctaLabel": "لیست پزشکان",
            "ctaLink": "/doctors",
            "order": 2,
        },
        {
            "id": "slide-3",
            "title": "مطالب الهام‌بخش برای نگهداری بهتر",
            "description": "در وبلاگ پت‌شاپ نکات تخصصی مراقبت و تربیت حیوانات خانگی را بخوانید.",
            "accent": "مقالات جدید",
            "image": "https://images.unsplash.com/photo-1507146426996-ef05306b995a?auto=format&fit=crop&w=1400&q=80",
            "ctaLabel": "وبلاگ پت‌شاپ",
            "ctaLink": "/blog",
            "order": 3,
        },
    ])


def default_users(password_hash: str) -> List[Dict[str, Any]]:
    return _stamp([
        {
            "id": "1",
            "email": DEFAULT_ADMIN_EMAIL,
            "name": "مدیر سیستم",
            "password": password_hash,
            "role": "admin",
        },
    ])
