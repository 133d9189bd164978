# jadwal/services/business/service_templates.py
"""Starter services created during onboarding, per business category (prices in IDR)"""

SERVICE_TEMPLATES = {
    "barbershop": [
        {"name": "Gentlemen Cut", "duration": 45, "price": 50000, "description": "Gunting + Keramas + Styling + Pijat Singkat"},
        {"name": "Premium Shaving", "duration": 30, "price": 35000, "description": "Cukur Jenggot/Kumis dengan handuk hangat"},
        {"name": "Hair Colouring Basic", "duration": 60, "price": 100000, "description": "Hitam / Dark Brown Only"},
    ],
    "salon": [
        {"name": "Cuci Blow Variasi", "duration": 45, "price": 60000, "description": "Cuci rambut + styling blow"},
        {"name": "Creambath Traditional", "duration": 60, "price": 85000, "description": "Pijat kepala & punggung"},
        {"name": "Manicure / Pedicure", "duration": 60, "price": 75000, "description": "Perawatan kuku tangan/kaki"},
    ],
    "dental": [
        {"name": "Konsultasi Dokter", "duration": 30, "price": 100000, "description": "Pemeriksaan awal"},
        {"name": "Scaling", "duration": 60, "price": 350000, "description": "Pembersihan karang gigi"},
        {"name": "Tambal Gigi", "duration": 45, "price": 250000, "description": "Per lubang gigi (Komposit)"},
    ],
    "spa": [
        {"name": "Full Body Massage", "duration": 90, "price": 200000, "description": "Pijat seluruh badan"},
        {"name": "Facial Treatment", "duration": 60, "price": 150000, "description": "Perawatan wajah lengkap"},
        {"name": "Body Scrub", "duration": 45, "price": 100000, "description": "Lulur badan"},
    ],
    "gym": [
        {"name": "Personal Training", "duration": 60, "price": 150000, "description": "Sesi latihan dengan trainer"},
        {"name": "Group Class", "duration": 45, "price": 50000, "description": "Kelas fitness grup"},
        {"name": "Assessment", "duration": 30, "price": 75000, "description": "Evaluasi kebugaran"},
    ],
    "auto": [
        {"name": "Servis Rutin", "duration": 60, "price": 150000, "description": "Ganti oli + cek mesin"},
        {"name": "Tune Up", "duration": 120, "price": 250000, "description": "Servis lengkap mesin"},
        {"name": "Cuci Motor/Mobil", "duration": 30, "price": 35000, "description": "Cuci exterior + interior"},
    ],
    "tutor": [
        {"name": "Private Lesson", "duration": 90, "price": 100000, "description": "Belajar privat 1-on-1"},
        {"name": "Group Lesson", "duration": 90, "price": 75000, "description": "Belajar kelompok max 3 orang"},
        {"name": "Consultation", "duration": 30, "price": 50000, "description": "Konsultasi materi"},
    ],
    "photo": [
        {"name": "Studio Portrait", "duration": 60, "price": 250000, "description": "Foto portrait studio"},
        {"name": "Product Photo", "duration": 45, "price": 150000, "description": "Foto produk per item"},
        {"name": "Event Coverage", "duration": 180, "price": 1500000, "description": "Dokumentasi acara 3 jam"},
    ],
    "laundry": [
        {"name": "Regular Wash", "duration": 1440, "price": 7000, "description": "Cuci per kg, 1-2 hari"},
        {"name": "Express Wash", "duration": 360, "price": 15000, "description": "Cuci per kg, 6 jam"},
        {"name": "Dry Clean", "duration": 2880, "price": 25000, "description": "Dry cleaning per item"},
    ],
    "other": [],
}
