from aiogram.types import ReplyKeyboardMarkup, KeyboardButton

def main_kb() -> ReplyKeyboardMarkup:
    return ReplyKeyboardMarkup(
        keyboard=[
            [KeyboardButton(text="/products"), KeyboardButton(text="/search")],
            [KeyboardButton(text="/cart"), KeyboardButton(text="/empty")],
            [KeyboardButton(text="/user"), KeyboardButton(text="/help")],
        ],
        resize_keyboard=True,
    )
