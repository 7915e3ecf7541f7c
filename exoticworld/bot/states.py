from aiogram.fsm.state import State, StatesGroup


class SearchInput(StatesGroup):
    waiting_query = State()


class UserInput(StatesGroup):
    waiting_user_id = State()
