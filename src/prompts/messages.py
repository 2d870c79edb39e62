"""
User-facing texts shown by the landing widgets.

Kept in one place so form handlers, the chat session and the console
shell stay free of literal copy.
"""

# --- Form validation ---
NAME_REQUIRED = "Укажите имя."
PHONE_REQUIRED = "Укажите телефон."
CHECKIN_REQUIRED = "Выберите дату заезда."
DAYS_REQUIRED = "Укажите количество дней (минимум 1)."
CONSENT_REQUIRED = "Поставьте галочку согласия на обработку персональных данных."

# --- Form submission ---
LEAD_SENT = "Заявка отправлена! Мы свяжемся с вами."
LEAD_SEND_FAILED = "Не удалось отправить. Попробуйте ещё раз или чуть позже."
SUBMISSION_IN_PROGRESS = "Заявка уже отправляется, подождите немного."
MANAGER_LEAD_PREPARED = (
    "Готово. Данные заявки подготовлены — дальше подключим отправку менеджеру."
)

# --- Booking modal context ---
BOOKING_CONTEXT_CONDITIONS = "Бронирование: условия"
BOOKING_CONTEXT_ROOM = "Бронирование: номер"
BOOKING_CONTEXT_TEMPLATE = "Бронирование: {title}"

# --- Chat widget ---
CHAT_GREETING = (
    "Привет! Я ИИ-консультант. Подскажу по номерам, датам заезда и помогу "
    "забронировать. Что интересует?"
)
CHAT_EMPTY_ANSWER = "…"
CHAT_FALLBACK = "Сейчас не получается ответить. Попробуйте ещё раз через минуту."

# --- Chat lead sub-panel ---
CHAT_LEAD_CONTACT_REQUIRED = "Укажите имя и телефон."
CHAT_LEAD_CONSENT_REQUIRED = "Нужно согласие на обработку персональных данных."
CHAT_LEAD_FAILED = "Не удалось отправить. Попробуйте ещё раз чуть позже."
CHAT_LEAD_CONFIRMED = "Спасибо! Контакты отправлены. Менеджер свяжется с вами."
CHAT_LEAD_COMMENT = "Лид из чата"
