from sqlalchemy.ext.asyncio import create_async_engine
from customers_api.config import Config
from sqlmodel import SQLModel
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

engine = create_async_engine(
    url=Config.DATABASE_URL,
    echo=Config.DATABASE_ECHO,
)

async def init_db():
    async with engine.begin() as conn:
        # Models must be imported so they are registered on SQLModel.metadata
        from customers_api.customers import models as _customer_models
        await conn.run_sync(SQLModel.metadata.create_all)

# Session factory configured for async operations
async_session_maker = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)
