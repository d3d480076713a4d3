import asyncio
from customers_api.db.main import async_session_maker, init_db
from customers_api.customers.schemas import CustomerInput
from customers_api.customers.store import SqlCustomerStore

async def create_customer(first_name: str, last_name: str, email: str = None, phone: str = None):
    customer_input = CustomerInput(first_name=first_name, last_name=last_name, email=email, phone=phone)

    if not customer_input.is_valid():
        print("Error: first and last name must not be empty.")
        return

    await init_db()

    async with async_session_maker() as session:
        result = await SqlCustomerStore(session).add(customer_input)

        if not result.success:
            print(f"Failed to create customer: {result.error_kind.value}")
            return

        customer = result.value
        print(f"Successfully created customer!")
        print(f"Name: {customer.first_name} {customer.last_name}")
        print(f"Email: {customer.email or '-'}")
        print(f"Phone: {customer.phone or '-'}")
        print(f"Customer ID: {customer.id}")

if __name__ == "__main__":
    import sys

    if 3 <= len(sys.argv) <= 5:
        # python seed_customers.py <first_name> <last_name> [email] [phone]
        asyncio.run(create_customer(*sys.argv[1:]))
    else:
        print("Usage: python seed_customers.py <first_name> <last_name> [email] [phone]")
        print("Example: python seed_customers.py Jane Doe jane@example.com '+1 555 0100'")
