"""Shared Experian XML samples for the test suite."""
import pytest


FULL_REPORT_XML = """<?xml version="1.0" encoding="UTF-8"?>
<INProfileResponse>
  <Header>
    <SystemCode>0</SystemCode>
    <ReportDate>20230701</ReportDate>
  </Header>
  <Current_Application>
    <Current_Application_Details>
      <Enquiry_Reason>6</Enquiry_Reason>
      <Current_Applicant_Details>
        <Last_Name>Sharma</Last_Name>
        <First_Name>Sagar</First_Name>
        <MobilePhoneNumber>9819137672</MobilePhoneNumber>
        <IncomeTaxPan>zzzzz9999z</IncomeTaxPan>
      </Current_Applicant_Details>
    </Current_Application_Details>
  </Current_Application>
  <CAIS_Account>
    <CAIS_Summary>
      <Credit_Account>
        <CreditAccountTotal>3</CreditAccountTotal>
      </Credit_Account>
      <Total_Outstanding_Balance>
        <Outstanding_Balance_Secured>85000</Outstanding_Balance_Secured>
        <Outstanding_Balance_UnSecured>15000.6</Outstanding_Balance_UnSecured>
        <Outstanding_Balance_All>100000.6</Outstanding_Balance_All>
      </Total_Outstanding_Balance>
    </CAIS_Summary>
    <CAIS_Account_DETAILS>
      <Subscriber_Name>  HDFC   BANK </Subscriber_Name>
      <Account_Number>1234567890123456</Account_Number>
      <Portfolio_Type>R</Portfolio_Type>
      <Account_Type>10</Account_Type>
      <Open_Date>20190115</Open_Date>
      <Credit_Limit_Amount>100000</Credit_Limit_Amount>
      <Account_Status>11</Account_Status>
      <Current_Balance>15000</Current_Balance>
      <Amount_Past_Due>0</Amount_Past_Due>
      <Date_Reported>20230630</Date_Reported>
      <Date_Closed></Date_Closed>
      <CAIS_Holder_Details>
        <Surname_Non_Normalized>SHARMA</Surname_Non_Normalized>
        <First_Name_Non_Normalized>SAGAR</First_Name_Non_Normalized>
        <Income_TAX_PAN>abcde1234f</Income_TAX_PAN>
      </CAIS_Holder_Details>
      <CAIS_Holder_Address_Details>
        <First_Line_Of_Address_non_normalized>FLAT 12</First_Line_Of_Address_non_normalized>
        <Second_Line_Of_Address_non_normalized>MG ROAD</Second_Line_Of_Address_non_normalized>
        <Third_Line_Of_Address_non_normalized></Third_Line_Of_Address_non_normalized>
        <City_non_normalized>MUMBAI</City_non_normalized>
        <State_non_normalized>27</State_non_normalized>
        <ZIP_Postal_Code_non_normalized>400001</ZIP_Postal_Code_non_normalized>
      </CAIS_Holder_Address_Details>
      <CAIS_Holder_Phone_Details>
        <Telephone_Number>02212345678</Telephone_Number>
      </CAIS_Holder_Phone_Details>
    </CAIS_Account_DETAILS>
    <CAIS_Account_DETAILS>
      <Subscriber_Name>SBI</Subscriber_Name>
      <Account_Number>123456</Account_Number>
      <Portfolio_Type>M</Portfolio_Type>
      <Account_Type>01</Account_Type>
      <Open_Date>00000000</Open_Date>
      <Highest_Credit_or_Original_Loan_Amount>2500000</Highest_Credit_or_Original_Loan_Amount>
      <Account_Status>13</Account_Status>
      <Current_Balance>85000</Current_Balance>
      <Amount_Past_Due>0</Amount_Past_Due>
      <Date_Reported>20230630</Date_Reported>
      <Date_Closed>20220101</Date_Closed>
    </CAIS_Account_DETAILS>
    <CAIS_Account_DETAILS>
      <Account_Number>987</Account_Number>
      <Account_Type>99</Account_Type>
      <Account_Status>80</Account_Status>
      <Current_Balance>0</Current_Balance>
      <Amount_Past_Due>5000</Amount_Past_Due>
    </CAIS_Account_DETAILS>
  </CAIS_Account>
  <TotalCAPS_Summary>
    <TotalCAPSLast7Days>2</TotalCAPSLast7Days>
  </TotalCAPS_Summary>
  <SCORE>
    <BureauScore>762</BureauScore>
  </SCORE>
</INProfileResponse>
"""

# Bureau-record variant: no Current_Application block, holder data as attributes
HOLDER_ONLY_XML = """<?xml version="1.0" encoding="UTF-8"?>
<INProfileResponse>
  <CAIS_Account>
    <CAIS_Account_DETAILS>
      <Account_Status>11</Account_Status>
      <Current_Balance>50000</Current_Balance>
      <Account_Type>04</Account_Type>
      <Portfolio_Type>I</Portfolio_Type>
      <CAIS_Holder_Details First_Name_Non_Normalized="JOHN" Surname_Non_Normalized="DOE"/>
    </CAIS_Account_DETAILS>
  </CAIS_Account>
</INProfileResponse>
"""

NAMELESS_XML = """<?xml version="1.0" encoding="UTF-8"?>
<INProfileResponse>
  <SCORE><BureauScore>700</BureauScore></SCORE>
</INProfileResponse>
"""


@pytest.fixture
def full_report_xml() -> bytes:
    return FULL_REPORT_XML.encode("utf-8")


@pytest.fixture
def holder_only_xml() -> bytes:
    return HOLDER_ONLY_XML.encode("utf-8")


@pytest.fixture
def nameless_xml() -> bytes:
    return NAMELESS_XML.encode("utf-8")
