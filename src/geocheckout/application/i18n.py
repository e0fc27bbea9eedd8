"""Translation key lookup for the checkout copy.

Unknown languages fall back to English; unknown keys come back as the
key itself so missing copy is visible rather than blank.
"""

from __future__ import annotations

from geocheckout.domain.model.localization import DEFAULT_LANGUAGE
from geocheckout.domain.model.value_objects import Money

TRANSLATIONS: dict[str, dict[str, str]] = {
    "en": {
        "limitedTime": "Limited Time Offer",
        "productTitle": "Premium Product",
        "productDescription": "Advanced digital solution for professionals",
        "orderSummary": "Order Summary",
        "customerName": "Full Name",
        "customerEmail": "Email",
        "customerPhone": "Phone",
        "currency": "Currency",
        "total": "Total",
        "discount": "Discount",
        "processPayment": "Complete Purchase",
        "processing": "Processing...",
        "paymentMethod": "Payment Method",
        "paymentSuccess": "Payment Successful!",
        "paymentError": "Payment failed. Please try again.",
        "paymentIntentFailed": "Failed to create payment intent",
        "securePayment": "Secure Payment",
        "securityAlert": "Security alert: unauthorized access attempt detected.",
        "thankYou": "Thank you for your purchase! You will receive instructions by email.",
    },
    "pt": {
        "limitedTime": "Oferta por Tempo Limitado",
        "productTitle": "Produto Premium",
        "productDescription": "Solução digital avançada para profissionais",
        "orderSummary": "Resumo do Pedido",
        "customerName": "Nome Completo",
        "customerEmail": "E-mail",
        "customerPhone": "Telefone",
        "currency": "Moeda",
        "total": "Total",
        "discount": "Desconto",
        "processPayment": "Finalizar Compra",
        "processing": "Processando...",
        "paymentMethod": "Forma de Pagamento",
        "paymentSuccess": "Pagamento Aprovado!",
        "paymentError": "Falha no pagamento. Tente novamente.",
        "securePayment": "Pagamento Seguro",
        "securityAlert": "Alerta de segurança: tentativa de acesso não autorizado detectada.",
        "thankYou": "Obrigado pela sua compra! Você receberá as instruções por email.",
    },
    "es": {
        "limitedTime": "Oferta por Tiempo Limitado",
        "productTitle": "Producto Premium",
        "productDescription": "Solución digital avanzada para profesionales",
        "orderSummary": "Resumen del Pedido",
        "customerName": "Nombre Completo",
        "customerEmail": "Correo electrónico",
        "customerPhone": "Teléfono",
        "currency": "Moneda",
        "total": "Total",
        "discount": "Descuento",
        "processPayment": "Finalizar Compra",
        "processing": "Procesando...",
        "paymentMethod": "Método de Pago",
        "paymentSuccess": "¡Pago Exitoso!",
        "paymentError": "El pago falló. Inténtalo de nuevo.",
        "securePayment": "Pago Seguro",
        "securityAlert": "Alerta de seguridad: intento de acceso no autorizado detectado.",
        "thankYou": "¡Gracias por tu compra! Recibirás las instrucciones por correo.",
    },
}


def get_translation(language: str, key: str) -> str:
    table = TRANSLATIONS.get(language, TRANSLATIONS[DEFAULT_LANGUAGE])
    if key in table:
        return table[key]
    return TRANSLATIONS[DEFAULT_LANGUAGE].get(key, key)


def format_currency(amount: float, currency: str) -> str:
    return str(Money.of(amount, currency))
