"""Template registry — maps template names to template classes."""

from storefront.notifications.templates.email_verification import EmailVerificationTemplate
from storefront.notifications.templates.order_confirmation import OrderConfirmationTemplate
from storefront.notifications.templates.order_delivered import OrderDeliveredTemplate
from storefront.notifications.templates.phone_verification import PhoneVerificationTemplate
from storefront.notifications.templates.registration_code import RegistrationCodeTemplate
from storefront.notifications.templates.welcome import WelcomeTemplate

TEMPLATE_REGISTRY: dict[str, type] = {
    template.name: template
    for template in (
        RegistrationCodeTemplate,
        WelcomeTemplate,
        EmailVerificationTemplate,
        PhoneVerificationTemplate,
        OrderConfirmationTemplate,
        OrderDeliveredTemplate,
    )
}


def get_template(name: str):
    """Look up a template class by name."""
    template_cls = TEMPLATE_REGISTRY.get(name)
    if template_cls is None:
        raise ValueError(f"No template registered under: {name}")
    return template_cls
