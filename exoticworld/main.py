import asyncio
import logging
from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode

from exoticworld.config import settings, validate_settings
from exoticworld.db.preferences import UserPreferences
from exoticworld.bot.handlers import router
from exoticworld.remote.api_client import ApiService
from exoticworld.repository.cart_repository import CartRepository
from exoticworld.repository.product_repository import ProductRepository
from exoticworld.services.shop import ShopController

logger = logging.getLogger(__name__)


async def main() -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    validate_settings()

    api = ApiService()
    controller = ShopController(ProductRepository(api), CartRepository(api), UserPreferences())
    controller.cart_total.subscribe(lambda total: logger.info("cart total: %s", total))

    await controller.start()
    logger.info("ExoticWorld client started for user %s", controller.user_id.value)

    bot = Bot(token=settings.bot_token, default=DefaultBotProperties(parse_mode=ParseMode.HTML))
    dp = Dispatcher(controller=controller)
    dp.include_router(router)

    try:
        await dp.start_polling(bot)
    finally:
        await controller.aclose()
        await api.aclose()
        await bot.session.close()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
