from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from aqua_erp.common.error_handlers import register_error_handlers
from aqua_erp.core.config import settings
from aqua_erp.core.dependencies import require_admin, require_cashier
from aqua_erp.api.v1 import (
    auth,
    bank_transfer,
    buy,
    credit,
    customer,
    dashboard,
    notification,
    report,
    sales,
    setting,
)

app = FastAPI(title="AquaERP", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Register API routers
app.include_router(auth.router, prefix="/api/auth", tags=["authentication"])

admin = [Depends(require_admin)]
app.include_router(dashboard.router, prefix="/api/admin", tags=["dashboard"], dependencies=admin)
app.include_router(notification.router, prefix="/api/admin", tags=["notifications"], dependencies=admin)
app.include_router(credit.router, prefix="/api/admin", tags=["credits"], dependencies=admin)
app.include_router(bank_transfer.router, prefix="/api/admin", tags=["bank transfer"], dependencies=admin)
app.include_router(report.router, prefix="/api/admin", tags=["reports"], dependencies=admin)
app.include_router(sales.router, prefix="/api/admin", tags=["sales"], dependencies=admin)
app.include_router(buy.router, prefix="/api/admin", tags=["buy"], dependencies=admin)
app.include_router(setting.router, prefix="/api/admin", tags=["settings"], dependencies=admin)
app.include_router(customer.router, prefix="/api/admin", tags=["customers"], dependencies=admin)

cashier = [Depends(require_cashier)]
app.include_router(sales.router, prefix="/api/cashier", tags=["cashier"], dependencies=cashier)
app.include_router(credit.cashier_router, prefix="/api/cashier", tags=["cashier"], dependencies=cashier)
app.include_router(customer.router, prefix="/api/cashier", tags=["cashier"], dependencies=cashier)
app.include_router(notification.router, prefix="/api/cashier", tags=["cashier"], dependencies=cashier)


@app.get("/")
def read_root():
    return {"message": "Welcome to the AquaERP APIs!"}
