import sys

from customers.generator import generate_customers, write_customers_csv


def generate_mock_customers(num_customers=5000, output_file="customers_generated.csv", seed=None):
    """
    Generates a customer population designed to exercise the sort strategies.
    Tiers are weighted (few corporate, many standard) and every arrival timestamp is unique,
    so all three strategies must agree on the final order.
    """
    customers = generate_customers(num_customers, seed=seed)
    df = write_customers_csv(customers, output_file)
    print(f"✅ Generated {num_customers} customers and saved to '{output_file}'")

    # Print a quick preview of the tier mix
    print("\nCustomers per tier:")
    counts = df["tier"].value_counts()
    for tier, count in counts.items():
        print(f"  {tier}: {count}")


if __name__ == "__main__":
    quantity = 5000
    if len(sys.argv) > 1:
        try:
            quantity = int(sys.argv[1])
        except ValueError:
            print(f"Invalid quantity {sys.argv[1]!r}. Using {quantity}.")
    generate_mock_customers(num_customers=quantity)
