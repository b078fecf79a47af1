from storefront.config import BusinessProfile
from storefront.profile import PROFILE_FIELDS, missing_profile_fields, profile_completion


def test_empty_profile_is_zero():
    profile = BusinessProfile()
    assert profile_completion(profile) == 0
    assert missing_profile_fields(profile) == list(PROFILE_FIELDS)


def test_each_field_adds_weight():
    profile = BusinessProfile(name="Acme Tools", description="Hardware", phone="  ")
    assert profile_completion(profile) == 50
    assert "phone" in missing_profile_fields(profile)


def test_completion_is_capped():
    profile = BusinessProfile(
        name="Acme Tools",
        description="Hardware",
        logo="https://cdn.example.com/logo.png",
        address="1 Main St",
        phone="555-0100",
        heroSlides=[{"title": "Welcome"}],
    )
    assert profile_completion(profile) == 100
    assert missing_profile_fields(profile) == [
        "email",
        "website",
        "additional_content",
    ]


def test_brands_do_not_count():
    profile = BusinessProfile(brands=[{"name": "Bosch"}])
    assert profile_completion(profile) == 0
    assert "brands" not in missing_profile_fields(profile)


def test_present_email_counts_even_when_empty():
    assert profile_completion(BusinessProfile(email="")) == 25
    assert "email" in missing_profile_fields(BusinessProfile())
