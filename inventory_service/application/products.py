from sqlalchemy import select
from inventory_service.domain.models import Product
from inventory_service.domain.results import Created, Result
from .schemas import (
    CreateProductRequest, UpdateProductRequest, DeleteProductRequest,
    GetProductRequest, GetProductsRequest, ProductRead,
)
from .store import entity, first_failure, live_rows, require_json, require_text

class ProductOperations:
    def create_product(self, req: CreateProductRequest) -> Result:
        failure = first_failure(
            require_text("product_name", req.product_name),
            require_json("json_data", req.json_data),
        )
        if failure:
            return failure
        row = Product(
            mservice_id=req.mservice_id,
            sku=req.sku,
            product_name=req.product_name.strip(),
            comment=req.comment,
            json_data=req.json_data,
            version=1,
        )
        return self._insert("CreateProduct", row, key=lambda r: Created(r.product_id))

    def update_product(self, req: UpdateProductRequest) -> Result:
        failure = first_failure(
            require_text("product_name", req.product_name),
            require_json("json_data", req.json_data),
        )
        if failure:
            return failure
        return self._modify(
            "UpdateProduct", Product, req.mservice_id,
            (Product.product_id == req.product_id,), req.version,
            sku=req.sku,
            product_name=req.product_name.strip(),
            comment=req.comment,
            json_data=req.json_data,
        )

    def delete_product(self, req: DeleteProductRequest) -> Result:
        return self._soft_delete(
            "DeleteProduct", Product, req.mservice_id,
            (Product.product_id == req.product_id,), req.version,
        )

    def get_product(self, req: GetProductRequest) -> Result:
        stmt = select(Product).where(
            *live_rows(Product, req.mservice_id), Product.product_id == req.product_id,
        )
        return self._fetch_one("GetProduct", stmt, entity(ProductRead))

    def get_products(self, req: GetProductsRequest) -> Result:
        stmt = (
            select(Product)
            .where(*live_rows(Product, req.mservice_id))
            .order_by(Product.product_id)
        )
        return self._fetch_all("GetProducts", stmt, entity(ProductRead))
