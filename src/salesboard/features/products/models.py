"""Data model for the seeded product-sale records."""

from tortoise import fields, models


class ProductTransaction(models.Model):
    # Ids come from the seed dataset, never generated locally.
    id = fields.IntField(primary_key=True, generated=False)
    title = fields.TextField()
    description = fields.TextField()
    price = fields.FloatField(description="Sale price, never negative")
    category = fields.CharField(max_length=100, db_index=True)
    image = fields.TextField(null=True)
    sold = fields.BooleanField(default=False)
    # Kept verbatim from the dataset, e.g. "2021-11-27T20:29:54+05:30".
    # Month filtering matches the "-MM-" segment of this text.
    date_of_sale = fields.CharField(max_length=64)

    def __str__(self):
        return f"{self.title} ({self.category}, ${self.price:.2f}, sold={self.sold})"

    class Meta:
        table = "product_transactions"
