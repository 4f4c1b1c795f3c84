"""Static reference data: BIST equities and crypto assets.

Prices are in TRY for equities and USD for crypto. Prediction, confidence
and sentiment are fixed labels, not model output.
"""
from borsa_dashboard.db import Category
from borsa_dashboard.schemas import Instrument, Prediction

RISE, WATCH, RISKY = Prediction.RISE, Prediction.WATCH, Prediction.RISKY

M = 1_000_000
B = 1_000_000_000
T = 1_000_000_000_000


def _equity(symbol, name, sector, price, change, volume, market_cap,
            prediction, confidence, sentiment) -> Instrument:
    return Instrument(
        symbol=symbol,
        name=name,
        category=Category.EQUITY,
        sector=sector,
        price=price,
        change_pct=change,
        volume=volume,
        market_cap=market_cap,
        prediction=prediction,
        confidence=confidence,
        sentiment=sentiment,
    )


def _crypto(symbol, name, price, change, volume, market_cap,
            prediction, confidence, sentiment, supply) -> Instrument:
    return Instrument(
        symbol=symbol,
        name=name,
        category=Category.CRYPTO,
        sector="Crypto",
        price=price,
        change_pct=change,
        volume=volume,
        market_cap=market_cap,
        prediction=prediction,
        confidence=confidence,
        sentiment=sentiment,
        circulating_supply=supply,
    )


TURKISH_STOCKS: tuple[Instrument, ...] = (
    _equity("ASELS", "Aselsan Elektronik", "Defense", 45.80, 2.3, 8.2 * M, 41.2 * B, RISE, 78, "Very Positive"),
    _equity("TUPRS", "Tüpraş", "Energy", 189.50, 1.8, 5.1 * M, 127.3 * B, RISE, 72, "Positive"),
    _equity("THYAO", "Türk Hava Yolları", "Airlines", 312.25, -0.5, 12.3 * M, 215.7 * B, WATCH, 65, "Neutral"),
    _equity("EREGL", "Ereğli Demir Çelik", "Steel", 56.40, 3.2, 15.8 * M, 89.4 * B, RISE, 81, "Very Positive"),
    _equity("AKBNK", "Akbank", "Banking", 67.85, 1.5, 22.4 * M, 176.4 * B, RISE, 76, "Positive"),
    _equity("GARAN", "Garanti Bankası", "Banking", 124.30, 0.3, 18.7 * M, 312.5 * B, WATCH, 68, "Neutral"),
    _equity("SAHOL", "Sabancı Holding", "Holding", 89.60, 2.1, 9.3 * M, 223.8 * B, RISE, 74, "Positive"),
    _equity("KCHOL", "Koç Holding", "Holding", 198.75, 2.8, 7.1 * M, 496.3 * B, RISE, 79, "Very Positive"),
    _equity("TCELL", "Turkcell", "Telecom", 98.45, -0.8, 11.2 * M, 217.6 * B, WATCH, 62, "Neutral"),
    _equity("PETKM", "Petkim", "Chemicals", 23.15, -1.9, 6.8 * M, 23.1 * B, RISKY, 45, "Negative"),
    _equity("ARCLK", "Arçelik", "Electronics", 134.20, 0.5, 4.9 * M, 98.4 * B, WATCH, 66, "Neutral"),
    _equity("BIMAS", "BIM Birleşik Mağazalar", "Retail", 456.50, 3.7, 3.2 * M, 278.2 * B, RISE, 83, "Very Positive"),
    _equity("ISCTR", "İş Bankası", "Banking", 14.85, 1.9, 28.5 * M, 148.5 * B, RISE, 77, "Positive"),
    _equity("SISE", "Şişe Cam", "Glass", 78.30, 0.2, 6.7 * M, 58.7 * B, WATCH, 64, "Neutral"),
    _equity("TOASO", "Tofaş Oto", "Automotive", 215.40, 2.5, 4.3 * M, 107.7 * B, RISE, 75, "Positive"),
    _equity("ENKAI", "Enka İnşaat", "Construction", 67.20, -0.3, 5.8 * M, 47.3 * B, WATCH, 61, "Neutral"),
    _equity("KOZAL", "Koza Altın", "Mining", 34.90, -2.1, 7.2 * M, 35.7 * B, RISKY, 48, "Negative"),
    _equity("FROTO", "Ford Otosan", "Automotive", 685.50, 3.1, 2.8 * M, 342.8 * B, RISE, 80, "Very Positive"),
    _equity("TAVHL", "TAV Havalimanları", "Transportation", 198.20, 0.7, 3.9 * M, 49.6 * B, WATCH, 67, "Neutral"),
    _equity("SODA", "Soda Sanayii", "Chemicals", 12.45, -1.6, 4.1 * M, 14.9 * B, RISKY, 42, "Negative"),
)

CRYPTO_ASSETS: tuple[Instrument, ...] = (
    _crypto("BTC", "Bitcoin", 95234.56, 5.2, 45.2 * B, 1.87 * T, RISE, 78, "Bullish", 19.6 * M),
    _crypto("ETH", "Ethereum", 3456.78, 3.8, 23.1 * B, 415.6 * B, RISE, 72, "Bullish", 120.3 * M),
    _crypto("BNB", "Binance Coin", 612.34, -1.2, 2.1 * B, 94.3 * B, WATCH, 58, "Neutral", 154.5 * M),
    _crypto("SOL", "Solana", 198.45, 8.5, 4.5 * B, 91.2 * B, RISE, 82, "Very Bullish", 459.7 * M),
    _crypto("XRP", "Ripple", 2.34, -2.1, 8.9 * B, 132.8 * B, RISKY, 45, "Bearish", 56.7 * B),
    _crypto("ADA", "Cardano", 1.02, 1.5, 1.8 * B, 35.7 * B, WATCH, 62, "Neutral", 35.0 * B),
    _crypto("AVAX", "Avalanche", 43.21, 4.3, 892 * M, 17.2 * B, RISE, 68, "Bullish", 398.2 * M),
    _crypto("DOT", "Polkadot", 7.89, -0.8, 456 * M, 11.3 * B, WATCH, 55, "Neutral", 1.4 * B),
    _crypto("MATIC", "Polygon", 0.98, 6.7, 678 * M, 9.8 * B, RISE, 75, "Bullish", 10.0 * B),
    _crypto("LINK", "Chainlink", 23.45, 2.9, 1.2 * B, 14.5 * B, WATCH, 64, "Neutral", 617.1 * M),
    _crypto("UNI", "Uniswap", 12.67, -3.4, 345 * M, 7.6 * B, RISKY, 48, "Bearish", 600.0 * M),
    _crypto("ATOM", "Cosmos", 9.87, 1.2, 234 * M, 3.8 * B, WATCH, 60, "Neutral", 385.0 * M),
)
