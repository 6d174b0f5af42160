"""User-facing reply texts. Written in Thai and localized at send time."""

from datetime import date

GREETING = "สวัสดีครับผม Tripster ดีใจที่คุณทักทายมา ลองเลือกคำสั่งด้านล่างเพื่อเริ่มต้นเลยครับ!"
WELCOME = "ยินดีต้อนรับสู่ Tripster! ลองเลือกคำสั่งด้านล่างเพื่อเริ่มต้นเลยครับ!"
REGION_GUIDANCE = (
    "ขออภัยครับ ผมให้ข้อมูลเฉพาะสถานที่ในภาคเหนือเท่านั้น "
    "ลองระบุสถานที่ในภาคเหนือ เช่น เชียงใหม่ หรือ เชียงราย"
)
MORE_INFO = "ต้องการดูข้อมูลเพิ่มเติมหรือไม่? ลองเลือกคำสั่งด้านล่างเลยครับ!"
TRIP_QUESTIONS = (
    "ขอบคุณที่สนใจ! ช่วยบอกเพิ่มเติมหน่อยครับ:\n"
    "- งบประมาณต่อวัน (เช่น ต่ำกว่า 2000 บาท)\n"
    "- ความชอบ (เช่น ธรรมชาติ, วัฒนธรรม)\n"
    "- เดินทางกับใคร (เช่น ครอบครัว, เพื่อน)\n"
    "- วิธีการเดินทาง (เช่น รถยนต์, รถไฟ)\n"
    "กรุณาพิมพ์คำตอบตามลำดับด้วยคั่นด้วยเครื่องหมาย | "
    "หรือเลือกคำสั่งด้านล่างเพื่อดูข้อมูลเพิ่มเติม"
)
PLACES_LINKS_HEADER = "ข้อมูลเพิ่มเติมเกี่ยวกับสถานที่:"
HOTELS_LINKS_HEADER = "ข้อมูลเพิ่มเติมเกี่ยวกับโรงแรม:"
PLACE_NOT_FOUND = 'ไม่พบข้อมูลของ "{name}"'
WEATHER_NOT_FOUND = 'ไม่พบข้อมูลสภาพอากาศของ "{name}"'
MAP_NOT_FOUND = 'ไม่พบข้อมูลแผนที่ของ "{name}" กรุณาตรวจสอบชื่อสถานที่'
BRANCH_FAILED = "ขออภัยครับ ระบบขัดข้องชั่วคราว กรุณาลองใหม่อีกครั้ง"
PROCESSING_FAILED = "เกิดข้อผิดพลาดในการประมวลผล กรุณาลองใหม่"

IMAGE_NOT_DOWNLOADED = "ไม่สามารถดาวน์โหลดภาพได้"
IMAGE_NOT_ANALYZED = "ไม่สามารถวิเคราะห์ภาพได้"
IMAGE_LANDMARK = 'ภาพนี้น่าจะเป็น "{landmark}" (ความมั่นใจ {confidence:.2f}%)'
IMAGE_LABELS_DETAIL = "\nรายละเอียดเพิ่มเติม: {labels}"
IMAGE_LABELS_ONLY = "ไม่สามารถระบุสถานที่ได้ แต่ภาพนี้อาจเกี่ยวข้องกับ: {labels}"

PLACEHOLDER_IMAGE_URL = "https://example.com/travel_image.jpg"

RECOMMEND_PROMPT = "แนะนำสถานที่ท่องเที่ยวยอดนิยม 5 แห่งใน {destination} ภาคเหนือของประเทศไทย"

PLAN_PROMPT = """
ช่วยวางแผนการท่องเที่ยวในประเทศไทยโดยอิงจากข้อมูลต่อไปนี้:
- จุดเริ่มต้น: {start_location}
- ปลายทาง: {destination}
- งบประมาณ: {budget} บาท
- ความชอบ: {preference}
- เดินทางกับ: {travel_with}
- วิธีการเดินทาง: {transport}
- วันเดินทางไป: {travel_date_start}
- วันเดินทางกลับ: {travel_date_end}
แนะนำสถานที่ท่องเที่ยว 2-3 แห่งที่เหมาะสมกับความชอบและงบประมาณ พร้อมชื่อสถานที่, ที่อยู่, และคำอธิบายสั้น ๆ
แนะนำโรงแรม 1-2 แห่งใกล้สถานที่ท่องเที่ยวหลัก โดยพิจารณาความนิยม (เรตติ้ง) และราคาที่เหมาะสมกับ {budget} บาท
หากเดินทางจาก {start_location} ไป {destination} ด้วย {transport} ควรใช้เส้นทางไหน หรือมีคำแนะนำอะไรเพิ่มเติม
หากไม่มีข้อมูลตรงตามความชอบ ให้แนะนำสถานที่ยอดนิยมใกล้เคียงใน {destination}
""".strip()
PLAN_HEADER = "🗺️ แผนการท่องเที่ยวจาก {start_location} ถึง {destination}:\n{plan}"

THAI_MONTHS = (
    "มกราคม",
    "กุมภาพันธ์",
    "มีนาคม",
    "เมษายน",
    "พฤษภาคม",
    "มิถุนายน",
    "กรกฎาคม",
    "สิงหาคม",
    "กันยายน",
    "ตุลาคม",
    "พฤศจิกายน",
    "ธันวาคม",
)


def thai_date(day: date) -> str:
    """Long Thai date in the Buddhist era, e.g. '18 ตุลาคม 2569'."""
    return f"{day.day} {THAI_MONTHS[day.month - 1]} {day.year + 543}"


def data_source_line(day: date) -> str:
    return f"ข้อมูลนี้มาจาก Google Places API (ข้อมูล ณ วันที่ {thai_date(day)})"
